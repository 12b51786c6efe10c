"""
Pytest configuration file for proper Unicode/UTF-8 handling

Test output prints Chinese text and pinyin with tone marks.
"""

import sys
import io
import os

# Force UTF-8 encoding globally
os.environ['PYTHONIOENCODING'] = 'utf-8'

# Windows consoles default to a legacy code page
if sys.platform == 'win32':
    if hasattr(sys.stdout, 'reconfigure'):
        sys.stdout.reconfigure(encoding='utf-8', errors='replace')
        sys.stderr.reconfigure(encoding='utf-8', errors='replace')
    elif sys.stdout.encoding != 'utf-8':
        sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding='utf-8', errors='replace')
        sys.stderr = io.TextIOWrapper(sys.stderr.buffer, encoding='utf-8', errors='replace')

# jieba attaches its own DEBUG-level stderr handler on import
import logging

import jieba

jieba.setLogLevel(logging.WARNING)
