from .user import User, Role, UserRole
from .stock import Stock
from .comment import Comment
from .portfolio import Portfolio
