"""
Unit Tests Package.

Pure functions (links, classifier, status model) are tested directly;
async helpers get mocked discord.py messages and threads.
"""
