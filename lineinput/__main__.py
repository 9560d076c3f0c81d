import os
import sys

# Enable importing also if not installed
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))


import lineinput


if __name__ == "__main__":
    lineinput.cli()
