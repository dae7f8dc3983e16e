from hashdupe.cli import main

main()
