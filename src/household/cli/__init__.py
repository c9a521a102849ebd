"""
Command Line Interface Package

`household` entry point for querying and recording workspace spending.

Command Structure:
- household: Main entry point with utility commands (version, config, categories)
- household workspace: Create, list and show workspaces; add members
- household expense: Add, update, delete, list and export expenses
- household report: Breakdowns, trends, settlement, stats and summary
- household budget: Set category and overall limits; budget-vs-actual status;
  recurring bills and their fixed monthly cost
"""
