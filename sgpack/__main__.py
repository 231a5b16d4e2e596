from sgpack.cli.app import main

main()
