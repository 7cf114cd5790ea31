from pathlib import Path
import os


DEFAULT_CACHE_DIR = Path.home()/'.school_console'/'cache'
CACHE_DIR = Path(os.environ.get('CONSOLE_CACHE_DIR', DEFAULT_CACHE_DIR))
ROSTER_SUFFIX = '-Students'
ROSTER_EXTENSION = '.xml'
