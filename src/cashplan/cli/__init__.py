"""
Command Line Interface Package

Command Structure:
- cashplan: main entry point with utility commands (version, config)
- cashplan projection: show or chart the projected balance
- cashplan leadtime: resolve production lead times
- cashplan snapshot: create and inspect the workspace document
"""
