class InvalidDistanceMatrix(ValueError):
    """Raised when a distance table is not a usable TSP cost matrix."""


class InvalidRoute(ValueError):
    """Raised when a route does not fit the distance matrix it is used with."""
