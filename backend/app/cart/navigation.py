class NavigationMenu:
    """Mobile navigation menu: the bar button opens it, the close button hides it."""

    def __init__(self):
        self.is_active = False

    def open(self) -> None:
        self.is_active = True

    def close(self) -> None:
        self.is_active = False
