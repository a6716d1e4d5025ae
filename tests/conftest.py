"""
Shared test setup.

The exercise catalog is built when praxis_engine is first imported and
merges files from $PRAXIS_HOME (default ~/.praxis).  Point PRAXIS_HOME at
an empty directory before any test module imports the package so results
never depend on the machine's user files.
"""

import os
import tempfile

os.environ["PRAXIS_HOME"] = tempfile.mkdtemp(prefix="praxis-home-")
