"""The check rule: is a player's king attacked?"""

from src.chess.game import GameState, Player
from src.chess.threats import ThreatAnalyzer


class CheckRule:
    def __init__(self, threat_analyzer: ThreatAnalyzer) -> None:
        self.threat_analyzer = threat_analyzer

    def check(self, state: GameState, player: Player) -> bool:
        """True iff the square of the player's king is attacked by the opponent. No king on the board --> never in check."""
        king_position = state.board.king_position(player.color)
        if king_position is None:
            return False
        return self.threat_analyzer.is_attacked(
            state.board, king_position, player.color.opponent
        )
