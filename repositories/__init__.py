from .stock_repository import StockRepository, StockQuery
from .comment_repository import CommentRepository, CommentQuery
from .portfolio_repository import PortfolioRepository
from .user_repository import UserRepository
