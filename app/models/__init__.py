# Models package
from app.models.user import User
from app.models.job import Job
from app.models.balance_transaction import BalanceTransaction
from app.models.job_impression import JobImpression
from app.models.notification import Notification

# Engagement Models
from app.models.engagement import JobLike, JobComment

# Job Fit Models
from app.models.job_fit import JobFitCriteria, ApplicantProfile, JobFitScore
