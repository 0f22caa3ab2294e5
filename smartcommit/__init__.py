"""
Smart Commit

Commit message drafts from local git changes, with optional Gemini refinement.
"""

__version__ = "1.0.0"

# Conventional Commit types the classifier can emit.
# Used by: prompts/builder.py (type list in the prompt)
COMMIT_TYPE_NAMES = ['feat', 'fix', 'refactor', 'chore', 'docs', 'test', 'build']
