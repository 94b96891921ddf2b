from __future__ import annotations


# Inbound (client -> server)
CREATE_ROOM = "createRoom"
JOIN_ROOM = "joinRoom"
LEAVE_ROOM = "leaveRoom"
START_GAME = "startGame"
MANTRI_GUESS = "mantriGuess"
NEXT_ROUND = "nextRound"
CHAT_MESSAGE = "chatMessage"

# Outbound (server -> client)
ROOM_JOINED = "roomJoined"
ROOM_ERROR = "roomError"
PLAYER_LIST = "playerList"
WAITING_STATUS = "waitingStatus"
CHAT_HISTORY = "chatHistory"
ROUND_HISTORY = "roundHistory"
YOUR_ROLE = "yourRole"
PUBLIC_REVEAL = "publicReveal"
ROUND_RESULT = "roundResult"
# CHAT_MESSAGE is also the outbound name for a stored chat line.
