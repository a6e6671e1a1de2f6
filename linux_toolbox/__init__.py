"""
Linux Toolbox - categorized script launcher for the terminal
"""

__version__ = "0.6.7"
