import logging
from contextlib import contextmanager
from typing import Generic, TypeVar, Type, Optional, List, Any, Dict
from sqlalchemy.exc import OperationalError, TimeoutError as PoolTimeoutError
from sqlalchemy.orm import Session
from movielist.db import Base
from movielist.core.exceptions import TransientStoreError

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=Base)

class BaseRepository(Generic[ModelType]):
    """Base repository with common CRUD operations"""
    
    def __init__(self, model: Type[ModelType], db: Session):
        self.model = model
        self.db = db

    @contextmanager
    def store_call(self):
        """Translate connectivity and timeout failures into TransientStoreError"""
        try:
            yield
        except (OperationalError, PoolTimeoutError) as e:
            logger.error(f"Database unavailable in {self.model.__name__} repository: {str(e)}")
            self.db.rollback()
            raise TransientStoreError() from e
    
    def get(self, id: Any) -> Optional[ModelType]:
        """Get by ID"""
        with self.store_call():
            return self.db.get(self.model, id)
    
    def create(self, obj_in: Dict[str, Any]) -> ModelType:
        """Create new object"""
        with self.store_call():
            db_obj = self.model(**obj_in)
            self.db.add(db_obj)
            self.db.commit()
            self.db.refresh(db_obj)
            return db_obj
    
    def filter_by(self, **kwargs) -> List[ModelType]:
        """Filter by multiple conditions, oldest first"""
        with self.store_call():
            return self.db.query(self.model).filter_by(**kwargs).order_by(self.model.id).all()
    
    def filter_one_by(self, **kwargs) -> Optional[ModelType]:
        """Filter by multiple conditions and return first"""
        with self.store_call():
            return self.db.query(self.model).filter_by(**kwargs).first()
