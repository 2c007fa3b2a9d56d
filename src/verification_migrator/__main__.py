import sys

from verification_migrator.cli import main

if __name__ == "__main__":
    sys.exit(main())
