import sys

from neurodx.demo import main

if __name__ == "__main__":
    sys.exit(main())
