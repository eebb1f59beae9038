from .presentation.cli import main

main()
