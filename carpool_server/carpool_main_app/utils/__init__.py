"""Utils package - helper functions and utilities"""

from .constants import *
