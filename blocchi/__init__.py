"""A falling-blocks puzzle game: piece rules, board, game session and pygame front end."""

__version__ = "0.1.0"