import sys

from termshell.core.cli import main

if __name__ == "__main__":
    sys.exit(main())
