from polybind.cmdline import main

main()
