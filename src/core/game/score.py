class ScoreLedger:
    """Placar da sessão. Só o total corrente é observável."""
    def __init__(self):
        self.total = 0

    def add(self, delta: int) -> int:
        self.total += delta
        return self.total

    def __repr__(self):
        return f"ScoreLedger({self.total})"
