from typing import List
import uuid
import enum

from sqlalchemy import (
    JSON, Column, ForeignKey, Integer, String, Text, DateTime, Uuid,
    Enum as SAEnum, UniqueConstraint,
    func,
)
from sqlalchemy.orm import declarative_base, relationship, Mapped

Base = declarative_base()

class SearchResult(Base):
    __tablename__ = "search_results"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, nullable=False)
    title = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=False)
    url = Column(String(2048), nullable=False)
    category = Column(String(100), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<SearchResult(id={self.id}, title={self.title}, category={self.category})>"

class ResourceType(enum.Enum):
    ARTICLE = "article"
    VIDEO = "video"
    COURSE = "course"
    TOOL = "tool"
    DOCUMENTATION = "documentation"
    BOOK = "book"

class Resource(Base):
    __tablename__ = "resources"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, nullable=False)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    url = Column(String(2048), nullable=False)
    type = Column(SAEnum(ResourceType), nullable=False, default=ResourceType.ARTICLE)
    image_url = Column(String(2048), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<Resource(id={self.id}, title={self.title}, type={self.type.value})>"

class LearningPath(Base):
    __tablename__ = "learning_paths"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, nullable=False)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    skill = Column(String(100), unique=True, nullable=False, index=True)
    icon = Column(String(16), nullable=True)
    difficulty = Column(String(50), nullable=False, default="Beginner")
    duration = Column(String(50), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    # Steps are always read back in curriculum order
    steps: Mapped[List["LearningStep"]] = relationship(
        "LearningStep",
        order_by="LearningStep.order",
        back_populates="learning_path",
        cascade="all, delete-orphan"
    )

    def __repr__(self):
        return f"<LearningPath(id={self.id}, skill={self.skill}, difficulty={self.difficulty})>"

class LearningStep(Base):
    __tablename__ = "learning_steps"

    __table_args__ = (
        UniqueConstraint('learning_path_id', 'order', name='unique_learning_path_step_order'),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, nullable=False)
    learning_path_id = Column(Uuid(as_uuid=True), ForeignKey("learning_paths.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    order = Column(Integer, nullable=False)
    resources = Column(JSON, nullable=False, default=list)
    estimated_hours = Column(Integer, nullable=False, default=0)

    learning_path: Mapped[LearningPath] = relationship("LearningPath", back_populates="steps")

    def __repr__(self):
        return f"<LearningStep(id={self.id}, title={self.title}, order={self.order})>"
