"""git-fresh - Reset a Git working tree without re-cloning.

Stashes uncommitted work, wipes the working tree except for protected
paths, restores tracked files from Git and re-applies the stash.
"""

__version__ = "1.2.0"
