from evalsys.models.eval_config import EvalConfig
from evalsys.models.user import User

__all__ = ["EvalConfig", "User"]
