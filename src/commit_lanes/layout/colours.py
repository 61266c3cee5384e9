"""Colour slot allocation with row-based reservations."""


class ColourLedger:
    """Growable set of colour ids, each reserved up to a row.

    A colour can be handed out for a branch starting at ``row`` only if its
    reservation ends strictly before ``row``. Lower ids are preferred.
    """

    def __init__(self) -> None:
        self.reserved_until: list[int] = []

    def __len__(self) -> int:
        return len(self.reserved_until)

    def allocate(self, start_row: int) -> int:
        """Return the lowest colour id free at ``start_row``, adding one if needed."""
        for colour, until in enumerate(self.reserved_until):
            if until < start_row:
                return colour
        self.reserved_until.append(0)
        return len(self.reserved_until) - 1

    def reserve(self, colour: int, until_row: int) -> None:
        self.reserved_until[colour] = until_row
