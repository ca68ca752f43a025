#!/usr/bin/env python3
"""Main entry point for the bank ledger server"""

from .api import run_server


def main():
    """Start the API server"""
    run_server()


if __name__ == "__main__":
    main()
