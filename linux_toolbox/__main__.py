import sys

from linux_toolbox.app import main

if __name__ == "__main__":
    sys.exit(main())
