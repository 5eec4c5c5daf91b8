"""
Tournament data file (TDF) parser.

The tournament software exports an XML document that this module turns into
a Tournament snapshot. Parsing is broken into components that can be used
independently:

    <tournament>
      <data><name>...</name></data>
      <timeelapsed>123</timeelapsed>
      <players>
        <player userid="..."><firstname/><lastname/><birthdate/></player>
      </players>
      <pods><pod><rounds>
        <round number="1" type="3">
          <matches>
            <match outcome="1">
              <player1 userid="..."/><player2 userid="..."/>
              <tablenumber>1</tablenumber>
            </match>
            <match outcome="5"><player userid="..."/></match>
          </matches>
        </round>
      </rounds></pod></pods>
    </tournament>

Bad records are skipped or degraded with a warning so the rest of the file
still loads. A document that is not XML at all raises TDFError.
"""

import logging
import re
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from vgctour.tournament_core.scoring import ScoringSystem, STANDARD_SCORING
from vgctour.tournament_core.structure import (
    Match,
    Outcome,
    Player,
    Round,
    RoundKind,
    Tournament,
)

logger = logging.getLogger(__name__)

_YEAR_RE = re.compile(r"(\d{4})")


class TDFError(ValueError):
    """The tournament data file could not be read at all."""


def _text(element: Optional[ET.Element], path: str, default: str = "") -> str:
    if element is None:
        return default
    found = element.find(path)
    if found is None or found.text is None:
        return default
    return found.text.strip()


def _parse_int(value: Optional[str]) -> Optional[int]:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return None


class TDFParser:
    """Parser for the tournament data file XML format."""

    def __init__(self, content: Union[str, bytes], scoring: ScoringSystem = STANDARD_SCORING):
        """Initialize parser with the XML content."""
        try:
            self.root = ET.fromstring(content)
        except ET.ParseError as e:
            raise TDFError(f"Tournament data file is not valid XML: {e}") from e
        if self.root.tag != "tournament":
            raise TDFError(f"Expected a <tournament> document, got <{self.root.tag}>")
        self.scoring = scoring
        self.players: Dict[str, Player] = {}
        self.rounds: Dict[int, Round] = {}

    def parse_header(self) -> Tuple[str, Optional[int]]:
        """Return (tournament name, time elapsed marker)."""
        name = _text(self.root, "data/name")
        time_elapsed = _parse_int(_text(self.root, "timeelapsed", default=""))
        return name, time_elapsed

    def parse_players(self) -> Dict[str, Player]:
        """Parse the player roster."""
        for element in self.root.findall("players/player"):
            player_id = (element.get("userid") or "").strip()
            if not player_id:
                logger.warning("Skipping player without userid")
                continue

            birth_year = None
            match = _YEAR_RE.search(_text(element, "birthdate"))
            if match:
                birth_year = int(match.group(1))

            self.players[player_id] = Player(
                player_id=player_id,
                first_name=_text(element, "firstname"),
                last_name=_text(element, "lastname"),
                birth_year=birth_year,
            )
        return self.players

    def parse_rounds(self) -> List[Round]:
        """Parse rounds from every pod, merging rounds that share a number."""
        for element in self.root.findall("pods/pod/rounds/round"):
            round = self._parse_round(element)
            if round is None:
                continue

            existing = self.rounds.get(round.number)
            if existing is None:
                self.rounds[round.number] = round
                continue

            if existing.kind != round.kind:
                logger.warning(
                    "Round %d listed as both %s and %s; keeping %s",
                    round.number,
                    existing.kind.value,
                    round.kind.value,
                    existing.kind.value,
                )
            self.rounds[round.number] = Round(
                round.number, existing.kind, existing.matches + round.matches
            )

        return [self.rounds[number] for number in sorted(self.rounds)]

    def parse_all(self) -> Tournament:
        """Parse the entire file into a Tournament snapshot."""
        name, time_elapsed = self.parse_header()
        players = self.parse_players()
        rounds = self.parse_rounds()
        logger.debug(
            "Parsed %r: %d players, %d rounds", name, len(players), len(rounds)
        )
        return Tournament(
            players=players,
            rounds=rounds,
            scoring=self.scoring,
            name=name,
            time_elapsed=time_elapsed,
        )

    # Helper methods

    def _parse_round(self, element: ET.Element) -> Optional[Round]:
        number = _parse_int(element.get("number"))
        if number is None or number < 1:
            logger.warning("Skipping round with invalid number %r", element.get("number"))
            return None

        if self.scoring.is_swiss_type(element.get("type", "")):
            kind = RoundKind.SWISS
        else:
            kind = RoundKind.ELIMINATION

        matches = []
        for match_element in element.findall("matches/match"):
            match = self._parse_match(match_element, number)
            if match is not None:
                matches.append(match)

        matches.sort(key=lambda m: m.table)
        return Round(number, kind, matches)

    def _parse_match(self, element: ET.Element, round_number: int) -> Optional[Match]:
        table = _parse_int(_text(element, "tablenumber", default="0")) or 0

        code = _parse_int(element.get("outcome"))
        try:
            outcome = Outcome(code)
        except ValueError:
            logger.warning(
                "Round %d table %d: unknown outcome %r, treating as unreported",
                round_number,
                table,
                element.get("outcome"),
            )
            outcome = Outcome.UNREPORTED

        single_id = self._player_ref(element, "player")
        player1_id = self._player_ref(element, "player1")
        player2_id = self._player_ref(element, "player2")

        if outcome == Outcome.BYE:
            bye_id = single_id or player1_id
            if not bye_id:
                logger.warning("Round %d: bye without a player, skipping", round_number)
                return None
            return Match(table, bye_id, None, Outcome.BYE)

        if not player1_id and not player2_id:
            logger.warning(
                "Round %d table %d: match without players, skipping", round_number, table
            )
            return None

        if not player1_id or not player2_id:
            logger.warning(
                "Round %d table %d: match with one player", round_number, table
            )
        # Each ID stays in its own slot so the outcome code keeps its meaning
        return Match(table, player1_id, player2_id, outcome)

    @staticmethod
    def _player_ref(element: ET.Element, tag: str) -> Optional[str]:
        found = element.find(tag)
        if found is None:
            return None
        return (found.get("userid") or "").strip() or None


def parse_tdf(content: Union[str, bytes], scoring: ScoringSystem = STANDARD_SCORING) -> Tournament:
    """Parse tournament data file content into a Tournament."""
    return TDFParser(content, scoring).parse_all()


def load_tournament(path: Union[str, Path], scoring: ScoringSystem = STANDARD_SCORING) -> Tournament:
    """Read and parse a tournament data file."""
    path = Path(path)
    if not path.exists():
        raise TDFError(f"Tournament data file not found: {path}")
    return parse_tdf(path.read_bytes(), scoring)
