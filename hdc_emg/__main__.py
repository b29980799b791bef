import sys

from hdc_emg.cli import main

if __name__ == "__main__":
    sys.exit(main())
