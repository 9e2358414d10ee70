"""
Kiho Worktime Puncher - command-line client for the Kiho v3 worktime API

Start and stop work sessions, pick a description from a configured list of
recurring tasks and list the latest punch lines.
"""

__version__ = "0.3.0"
