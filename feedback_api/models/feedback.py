# feedback_api/models/feedback.py
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text, func, text

from feedback_api.db.base_class import Base


class FeedbackForm(Base):
    __tablename__ = "feedback_forms"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="", server_default="")
    created_by = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    is_active = Column(Boolean, nullable=False, default=True, server_default=text("true"))
    # serialized list of form fields; NULL when the form has none
    fields = Column(Text, nullable=True)


class FeedbackResponse(Base):
    __tablename__ = "feedback_responses"

    id = Column(Integer, primary_key=True, autoincrement=True)
    # no FK: responses outlive the form they were submitted to
    form_id = Column(Integer, nullable=False, index=True)
    respondent_email = Column(String(255), nullable=False, default="anonymous", server_default="anonymous")
    response_data = Column(Text, nullable=False)
    submitted_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
