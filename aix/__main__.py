from aix.cli import main

main()
