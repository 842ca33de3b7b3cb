"""
governance_core.__main__

Allows `python -m governance_core <command>` as an alias for the CLI.
"""

import sys

from governance_core.cli import main

sys.exit(main())
