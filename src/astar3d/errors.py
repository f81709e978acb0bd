# astar3d/errors.py


class CoordinateError(IndexError):
    """Coordinate outside the graph's bounds."""

    def __init__(self, coord, size):
        super().__init__(f"invalid node coordinates {tuple(coord)} for graph of size {tuple(size)}")
        self.coord, self.size = tuple(coord), tuple(size)


class HeapEmptyError(IndexError):
    pass


class HeapCapacityError(OverflowError):
    pass


class SearchBudgetExceeded(RuntimeError):
    def __init__(self, expanded: int, budget: int):
        super().__init__(f"search expanded {expanded} nodes, budget is {budget}")
        self.expanded, self.budget = expanded, budget
