"""
curriculex - Curriculum knowledge-state index.

Precomputes a lexicon of every vocabulary item, grammar suffix and connector
word a curriculum introduces, and answers "what does the learner already
know at this step?" for any step of any lesson.
"""

__version__ = "0.1.0"
