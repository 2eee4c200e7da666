"""Entrypoint for `python -m mbx`."""

from mbx.cli.main import main

if __name__ == "__main__":
    main()
