from bcr.cli.app import main

main()
