class HabitError(Exception):
    pass


class InvalidMeasurementError(HabitError):
    pass


class UnknownItemKindError(HabitError):
    pass


class ProfileNotFoundError(HabitError):
    pass


class StaleProfileVersionError(HabitError):
    pass
