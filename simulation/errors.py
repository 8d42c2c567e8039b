"""Wyjątki silnika i warstwy uruchomieniowej."""


class SimulationError(Exception):
    """Bazowy błąd symulacji."""


class PreconditionError(SimulationError):
    """
    Naruszenie warunku wstępnego: kadra krótsza niż 11 zawodników
    albo pusty zbiór zawodników do wyboru (wszyscy z boiska usunięci).
    """


class SimulationRejectedError(SimulationError):
    """Symulacja nie może wystartować - host odrzuca żądanie."""


class MatchAlreadyCompletedError(SimulationRejectedError):
    pass


class MatchNotFoundError(SimulationRejectedError):
    pass
