#!/usr/bin/env python3
from webqa_testgen.cli import main

if __name__ == "__main__":
    main()
