from dataclasses import dataclass, field


@dataclass
class Deck:
    """
    A deck as two ordered lists of printing ids.

    Attributes:
        main_deck: Main deck pids (40 for a legal deck, up to 50 while editing)
        lrig_deck: LRIG deck pids (up to 10 for a legal deck, 20 while editing)
    """

    main_deck: list[int] = field(default_factory=list)
    lrig_deck: list[int] = field(default_factory=list)

    def all_pids(self) -> list[int]:
        """Main deck followed by LRIG deck."""
        return self.main_deck + self.lrig_deck

    def copy(self) -> "Deck":
        """Independent copy of both lists."""
        return Deck(main_deck=list(self.main_deck), lrig_deck=list(self.lrig_deck))
