"""Launch the desktop application: python -m phaseflow"""
import sys

from phaseflow.app.main import main

if __name__ == "__main__":
    sys.exit(main())
