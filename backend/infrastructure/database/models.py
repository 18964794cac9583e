from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, Integer, String, Text

from .connection import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Entry(Base):
    __tablename__ = "entries"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False, default="")
    youtube_link = Column(String, nullable=False, default="")
    date = Column(DateTime(timezone=True), nullable=True)  # When the podcast or talk happened
    speaker = Column(String, nullable=False, default="", index=True)

    main_idea = Column(Text, nullable=False, default="")
    key_takeaways = Column(JSON, nullable=False, default=list)
    central_problem = Column(Text, nullable=False, default="")
    strengths = Column(JSON, nullable=False, default=list)
    weaknesses = Column(JSON, nullable=False, default=list)
    counterarguments = Column(JSON, nullable=False, default=list)
    practical_lessons = Column(JSON, nullable=False, default=list)
    two_minute_version = Column(JSON, nullable=False, default=list)
    action_checklist = Column(JSON, nullable=False, default=list)

    # Filled once by content generation
    social_media_hooks = Column(JSON, nullable=False, default=list)
    content_topics = Column(JSON, nullable=False, default=list)
    monetization_ideas = Column(JSON, nullable=False, default=list)

    tags = Column(JSON, nullable=False, default=list)
    notes = Column(Text, nullable=False, default="")

    created_at = Column(DateTime(timezone=True), default=_utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), default=_utcnow)

    def __repr__(self) -> str:
        return f"<Entry id={self.id} title={self.title!r}>"
