from civer.cli.app import main

main()
