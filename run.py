"""
Entry Point Script (Bootstrap)
==============================
Runs the matrix command-line interface straight from a source checkout.

Without arguments it prints the bundled collision-layer example, which is a
quick check that the checkout, numpy and h5py all work.

Usage:
    $ python run.py
    $ python run.py new layers.h5 Default Player Enemy --kind bool
    $ python run.py set layers.h5 0 1 x
"""
import sys
import os

# Make 'matrixeditor' importable without installing the package
current_dir: str = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, os.path.join(current_dir, 'src'))

from matrixeditor.__main__ import main

if __name__ == "__main__":
    sys.exit(main(sys.argv[1:] or ["show"]))
