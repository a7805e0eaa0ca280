import sys

from bookshop.main import main

if __name__ == "__main__":
    sys.exit(main())
