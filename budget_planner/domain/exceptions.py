"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class EntityNotFoundError(DomainException):
    """A user or goal reference the caller should have resolved does not exist"""

    pass


class UserNotFoundError(EntityNotFoundError):
    """No user with the given id"""

    def __init__(self, user_id: int):
        super().__init__(f"User {user_id} not found")
        self.user_id = user_id


class GoalNotFoundError(EntityNotFoundError):
    """No goal with the given id for this user"""

    def __init__(self, goal_id: int):
        super().__init__(f"Goal {goal_id} not found")
        self.goal_id = goal_id


class BudgetRuleNotFoundError(EntityNotFoundError):
    """No stored monthly limit for this user and category"""

    def __init__(self, category: str):
        super().__init__(f"No budget rule for {category}")
        self.category = category
