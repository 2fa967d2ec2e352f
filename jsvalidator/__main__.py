from jsvalidator.jsvalidator import main

main()
