class PointsError(Exception):
    pass


class RewardNotFoundError(PointsError):
    pass


class InsufficientPointsError(PointsError):
    pass
