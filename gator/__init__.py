# -*- coding: utf-8 -*-
"""
gator: an RSS/Atom aggregator driven from the command line.

Subpackages:
- `gator.rss`: feeds, posts, the fetch/parse/reconcile pipeline and the polling scheduler
- `gator.users`: users and the per-user session file
- `gator.cli`: command dispatch
"""

__version__ = "0.1.0"
