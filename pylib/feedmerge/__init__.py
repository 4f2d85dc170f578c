'''feedmerge: fetch a handful of feeds at once and list their posts by month.'''

__version__ = '0.1.0'
