"""
Game errors.

Every error carries a message that is safe to show to the player who caused
it. The session coordinator reports these back to the sender as ``roomError``;
room state is left untouched whenever one is raised.
"""

from __future__ import annotations


class GameError(Exception):
    """Base class for all rejected game actions."""

    message = "Action not allowed."

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


# ============ Input ============

class InvalidPayload(GameError):
    message = "Invalid request."


class NameRequired(InvalidPayload):
    message = "Please enter your name."


class RoomCodeRequired(InvalidPayload):
    message = "Please enter a room code."


# ============ Room ============

class RoomNotFound(GameError):
    message = "Room does not exist."


class RoomFull(GameError):
    message = "Room is already full."


class RoomAlreadyStarted(GameError):
    message = "Game already started."


class AlreadyInRoom(GameError):
    message = "You are already in this room."


class NotInRoom(GameError):
    message = "You are not in this room."


# ============ Round ============

class NotHost(GameError):
    message = "Only the host can start the game."


class NotEnoughPlayers(GameError):
    message = "Game can start only when 4 players have joined."


class InvalidState(GameError):
    message = "That is not possible right now."


class NotMantri(GameError):
    message = "Only the Mantri can make the guess."


class InvalidTarget(GameError):
    message = "Pick another player in the room."
