from epitech_sync_cli import main

main()
