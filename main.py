# main.py
import sys

from railnav.app.cli import main

if __name__ == "__main__":
    sys.exit(main())
