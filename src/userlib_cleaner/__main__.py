from userlib_cleaner.cli.main_cli import main

main()
