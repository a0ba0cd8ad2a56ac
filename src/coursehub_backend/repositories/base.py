"""
Base repository pattern implementation.

Repositories own the SQLAlchemy queries of one model. Methods that write
commit their own unit of work unless documented otherwise; conditional
updates used inside a larger transaction leave committing to the caller.
"""

from abc import ABC
from typing import Any, Dict, Generic, List, Optional, Tuple, Type, TypeVar
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Query, Session

T = TypeVar('T')


class RepositoryError(Exception):
    """Base exception for repository operations."""
    pass


class NotFoundError(RepositoryError):
    """Exception raised when entity is not found."""
    
    def __init__(self, entity_type: str, entity_id: Any):
        super().__init__(f"{entity_type} with id {entity_id} not found")
        self.entity_type = entity_type
        self.entity_id = entity_id


class DuplicateError(RepositoryError):
    """Raised when a write violates a unique, foreign key or check constraint."""
    
    def __init__(self, entity_type: str, criteria: Dict[str, Any]):
        super().__init__(f"{entity_type} violates a constraint: {criteria}")
        self.entity_type = entity_type
        self.criteria = criteria


class BaseRepository(ABC, Generic[T]):
    """Common lookups and writes for a single model class."""
    
    def __init__(self, db: Session, model: Type[T]):
        self.db = db
        self.model = model
    
    @property
    def entity_name(self) -> str:
        return self.model.__name__
    
    def get_by_id(self, entity_id: Any) -> T:
        """
        Get entity by ID.
        
        Raises:
            NotFoundError: If entity not found
        """
        entity = self.get_by_id_optional(entity_id)
        if entity is None:
            raise NotFoundError(self.entity_name, entity_id)
        return entity
    
    def get_by_id_optional(self, entity_id: Any) -> Optional[T]:
        return self.db.query(self.model).filter(self.model.id == entity_id).first()
    
    def find_one_by(self, **criteria) -> Optional[T]:
        return self._filtered(criteria).first()
    
    def count(self, **criteria) -> int:
        return self._filtered(criteria).count()
    
    def create(self, entity: T) -> T:
        """
        Insert a new entity and return it refreshed.
        
        Raises:
            DuplicateError: If the row violates a constraint
            RepositoryError: If the database operation fails
        """
        self.db.add(entity)
        self._commit("create", {"id": getattr(entity, "id", None)})
        self.db.refresh(entity)
        return entity
    
    def update(self, entity_id: Any, updates: Dict[str, Any]) -> T:
        """
        Apply ``updates`` to the columns of an existing entity.
        
        Keys that are not attributes of the model are ignored.
        
        Raises:
            NotFoundError: If entity not found
            DuplicateError: If the change violates a constraint
            RepositoryError: If the database operation fails
        """
        entity = self.get_by_id(entity_id)
        
        for key, value in updates.items():
            if hasattr(entity, key):
                setattr(entity, key, value)
        
        self._commit("update", updates)
        self.db.refresh(entity)
        return entity
    
    def delete(self, entity_id: Any) -> None:
        """
        Delete an entity together with its ORM-cascaded children.
        
        Raises:
            NotFoundError: If entity not found
            RepositoryError: If the database operation fails
        """
        self.db.delete(self.get_by_id(entity_id))
        self._commit("delete", {"id": entity_id})
    
    def paginate(self, query: Query, order_by: Any, skip: int = 0, limit: int = 20) -> Tuple[List[T], int]:
        """Return one page of ``query`` and the total row count."""
        total = query.count()
        items = query.order_by(order_by).offset(skip).limit(limit).all()
        return items, total
    
    def _filtered(self, criteria: Dict[str, Any]) -> Query:
        query = self.db.query(self.model)
        for key, value in criteria.items():
            query = query.filter(getattr(self.model, key) == value)
        return query
    
    def _commit(self, operation: str, context: Dict[str, Any]):
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise DuplicateError(self.entity_name, context)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise RepositoryError(f"Failed to {operation} {self.entity_name}: {e}")
