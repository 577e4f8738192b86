from difflogpack.cli.app import main

main()
