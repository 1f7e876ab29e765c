"""Main entry point for the Letterpress move finder."""

from letterpress import main

main()
