#!/usr/bin/env python3
"""Backup runner"""
import sys
from probackup.cli import main

if __name__ == '__main__':
    # e.g. python run.py -s /srv/data -b /mnt/backups
    sys.exit(main())
