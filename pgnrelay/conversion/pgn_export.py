# ==============================================================================
# pgn_export.py  –  PGN text serialisation for replayed games
#
# python-chess pads comments as `{ ... }`; broadcast consumers expect the
# compact `{[%clk 1:2:3]}` form, so the exporter writes comments tight against
# their braces. Movetext is kept on one line.
# ==============================================================================

from __future__ import annotations

from typing import List, Union

import chess.pgn


class ClockCommentExporter(chess.pgn.StringExporter):
    """StringExporter writing `{comment}` instead of `{ comment }`."""

    def __init__(self, columns=None, headers=True, comments=True, variations=True):
        super().__init__(
            columns=columns, headers=headers, comments=comments, variations=variations
        )

    def visit_comment(self, comment: Union[str, List[str]]) -> None:
        if not self.comments or (self.variation_depth and not self.variations):
            return

        texts = [comment] if isinstance(comment, str) else comment
        for text in texts:
            text = text.replace("}", "").strip()
            if text:
                self.write_token("{" + text + "} ")
        self.force_movenumber = True


def export_pgn(game: chess.pgn.Game) -> str:
    """Serialise `game` to PGN text: headers, blank line, movetext + result."""
    return game.accept(ClockCommentExporter())
