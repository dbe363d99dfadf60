from tagwalk.cmdline import main

main()
