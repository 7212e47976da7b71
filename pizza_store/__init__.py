"""pizza-store: a command line client for a small pizza chain's database"""

__version__ = "1.0.0"
