from .vote import Vote
