"""Version information for towboat package"""

__version__ = "0.3.0"
__version_info__ = (0, 3, 0)
__author__ = "towboat contributors"
__license__ = "MIT"
