"""
Entry point for running the adjuster as a module.

Usage:
    python -m adjuster adjust input.json -o output.json
    python -m adjuster validate input.json
    python -m adjuster view input.json --day monday
    python -m adjuster template template.json --start 07:45 --periods 8
"""

from adjuster.cli import main

if __name__ == "__main__":
    main()
