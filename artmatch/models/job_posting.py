# models/job_posting.py
from sqlalchemy import Column, Integer, String, TEXT, DECIMAL, TIMESTAMP, ForeignKey, Enum, UniqueConstraint, func
from sqlalchemy.orm import relationship
from artmatch.core.database import Base

ApplicationStatusEnum = Enum(
    'pending', 'viewed', 'shortlisted', 'rejected', 'hired',
    name="application_status_enum"
)

class JobPosting(Base):
    # 告訴 SQLAlchemy，這個類別對應到資料庫中名為 job_postings 的表格 (table)
    __tablename__ = "job_postings"

    job_id = Column(Integer, primary_key=True, autoincrement=True)
    employer_user_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(TEXT, nullable=False)
    location = Column(String(255))
    budget = Column(DECIMAL(10, 2))
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    # 呼應 user.py 中的 'job_postings'
    employer = relationship(
        "User",
        back_populates="job_postings",
        lazy="selectin"
    )

    # 刪除職缺時，一併刪除關聯的應徵紀錄
    applications = relationship(
        "JobApplication",
        back_populates="job",
        cascade="all, delete-orphan"
    )


class JobApplication(Base):
    __tablename__ = "job_applications"
    __table_args__ = (
        # 同一位藝術家對同一職缺只能應徵一次
        UniqueConstraint("job_id", "artist_user_id", name="uq_job_applications_pair"),
    )

    application_id = Column(Integer, primary_key=True, autoincrement=True)
    job_id = Column(Integer, ForeignKey("job_postings.job_id", ondelete="CASCADE"), nullable=False, index=True)
    artist_user_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    status = Column(ApplicationStatusEnum, default='pending', nullable=False)
    created_at = Column(TIMESTAMP, server_default=func.now())

    job = relationship("JobPosting", back_populates="applications", lazy="selectin")
    artist = relationship("User")
