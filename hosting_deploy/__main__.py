#!/usr/bin/env python3
"""
Entry point for running as module: python -m hosting_deploy
"""

import sys
import asyncio

from hosting_deploy.app import main


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
