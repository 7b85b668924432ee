"""Demo job catalogue used to populate and repair demo companies."""

from pydantic import BaseModel, ConfigDict

from careerhub.core.schemas import Company, ExperienceLevel, JobDraft, JobPatch, JobType

DEMO_CURRENCY = "INR"
DEMO_PERIOD = "yearly"


class DemoRole(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    location: str
    experience_level: ExperienceLevel
    salary_min: int
    salary_max: int
    salary_label: str
    job_type: JobType = "full-time"


DEMO_ROLES: tuple[DemoRole, ...] = (
    DemoRole(title="Software Engineer", location="Remote", experience_level="mid",
             salary_min=1_200_000, salary_max=1_800_000, salary_label="₹12L – ₹18L per year"),
    DemoRole(title="Senior Backend Engineer", location="Bangalore, India", experience_level="senior",
             salary_min=2_200_000, salary_max=3_200_000, salary_label="₹22L – ₹32L per year"),
    DemoRole(title="Frontend Engineer", location="Remote", experience_level="mid",
             salary_min=1_100_000, salary_max=1_700_000, salary_label="₹11L – ₹17L per year"),
    DemoRole(title="Product Designer", location="Remote", experience_level="mid",
             salary_min=1_000_000, salary_max=1_600_000, salary_label="₹10L – ₹16L per year"),
    DemoRole(title="Talent Acquisition Specialist", location="Remote", experience_level="mid",
             salary_min=800_000, salary_max=1_400_000, salary_label="₹8L – ₹14L per year"),
    DemoRole(title="Data Analyst", location="Mumbai, India", experience_level="entry",
             salary_min=900_000, salary_max=1_500_000, salary_label="₹9L – ₹15L per year"),
    DemoRole(title="Customer Success Manager", location="Remote", experience_level="mid",
             salary_min=800_000, salary_max=1_400_000, salary_label="₹8L – ₹14L per year"),
    DemoRole(title="Marketing Manager", location="Remote", experience_level="mid",
             salary_min=900_000, salary_max=1_600_000, salary_label="₹9L – ₹16L per year"),
)

_BY_TITLE: dict[str, DemoRole] = {role.title: role for role in DEMO_ROLES}


def salary_for_title(title: str) -> DemoRole | None:
    return _BY_TITLE.get(title)


def base_title(title: str) -> str:
    """Strip a ``"#n"`` suffix: ``"Data Analyst #3"`` → ``"Data Analyst"``."""
    return title.split("#", 1)[0].strip()


def demo_description(company: Company, title: str) -> str:
    return (
        f"Join {company.name} as a {title}. "
        "This is sample seeded data to help you test filters, cards, and job detail modals."
    )


def build_demo_jobs(company: Company, count: int) -> list[JobDraft]:
    """``count`` open jobs cycling through the catalogue."""
    drafts = []
    for i in range(count):
        role = DEMO_ROLES[i % len(DEMO_ROLES)]
        drafts.append(
            JobDraft(
                company_id=company.id,
                title=role.title,
                description=demo_description(company, role.title),
                location=role.location,
                job_type=role.job_type,
                experience_level=role.experience_level,
                status="open",
                salary_min=role.salary_min,
                salary_max=role.salary_max,
                salary_currency=DEMO_CURRENCY,
                salary_period=DEMO_PERIOD,
                salary_range_string=role.salary_label,
                is_featured=False,
            )
        )
    return drafts


def patch_seeded_job(title: str) -> JobPatch:
    """Normalise a seeded title and apply its catalogue salary.

    Titles outside the catalogue get their salary fields cleared.
    """
    clean = base_title(title)
    role = salary_for_title(clean)
    if role is None:
        return JobPatch(
            title=clean,
            salary_min=None,
            salary_max=None,
            salary_currency=None,
            salary_period=None,
            salary_range_string=None,
        )
    return JobPatch(
        title=clean,
        salary_min=role.salary_min,
        salary_max=role.salary_max,
        salary_currency=DEMO_CURRENCY,
        salary_period=DEMO_PERIOD,
        salary_range_string=role.salary_label,
    )
