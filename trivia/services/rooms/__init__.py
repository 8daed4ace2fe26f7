"""In-memory trivia rooms.

``registry`` maps room codes to rooms, ``engine`` runs the
lobby/question/result cycle on top of it, and ``broadcast`` and
``scheduler`` are the Socket.IO-backed pieces the engine is handed at
startup.
"""
