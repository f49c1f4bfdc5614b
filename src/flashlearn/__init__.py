from flashlearn.consts import VERSION

__version__ = VERSION
