# File: projector/models/project.py

"""
Project model.

A project is a title/description pair owned by the user who created it.
The owner is written once on insert; updates only touch title and
description.
"""

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from projector.models.base import Base, new_id


class Project(Base):
    __tablename__ = "projects"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")

    # Column is owner_id in the table, exposed as `owner` on the wire
    owner: Mapped[str] = mapped_column(
        "owner_id",
        String(32),
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<Project id={self.id!r} title={self.title!r} owner={self.owner!r}>"
