from jobtracker.cli import main

main()
