from wsb.cli.app import main

main()
