"""
Recommendation quiz.

Responsibilities:
- Define the five quiz questions and their answer options.
- Track wizard progress (answer, next, back, reset) per session.
- Score every catalog provider against a complete answer set.
- Shape the top matches for display.
"""
