"""Lesson Quizzer: turn a PDF handout into a 40-question multiple-choice exam."""

__version__ = "0.1.0"
