"""Package entry point for ``python -m cdnfailover``."""

from cdnfailover.cli import main

if __name__ == "__main__":
    main()
