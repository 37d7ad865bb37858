from jiri.cli import main

main()
