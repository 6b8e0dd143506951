"""
Utility functions for generating engineers, projects and assignments.
"""
from datetime import date, timedelta
from typing import Any, Dict, List, Optional, Tuple

from faker import Faker

from models import Assignment, Engineer, Project, ProjectStatus, Seniority
from utils.logger import logger


class DataGenerator:
    """Generator for sample data including engineers, projects and assignments."""

    def __init__(
        self,
        seed: int = 42,
        config: Optional[Dict[str, Any]] = None,
        reference_date: Optional[date] = None,
    ):
        """
        Initialize the generator with a specific seed and optional configuration.

        Args:
            seed: Random seed for reproducibility
            config: Optional configuration settings
            reference_date: Date the sample projects and assignments are placed
                around (overrides the config value)
        """
        self.seed = seed
        self.fake = Faker()
        self.fake.seed_instance(seed)

        self.config = config or {
            "skills": [
                "React",
                "Node.js",
                "GraphQL",
                "Java",
                "Spring",
                "SQL",
                "TypeScript",
                "Python",
                "Docker",
                "AWS",
            ],
            "departments": ["Frontend", "Backend", "Platform", "Data"],
            "skills_per_engineer_min": 1,
            "skills_per_engineer_max": 4,
            "skills_per_project_min": 0,
            "skills_per_project_max": 3,
            "part_time_ratio": 0.2,  # 20% of engineers work half time
            "allocation_choices": [10, 20, 25, 30, 40, 50],
            "assignments_per_engineer_max": 3,
            "reference_date": date(2024, 6, 1),
        }
        if reference_date is not None:
            self.config = dict(self.config, reference_date=reference_date)

    def _pick_skills(self, low: int, high: int) -> List[str]:
        skills = self.config["skills"]
        count = self.fake.random_int(min=low, max=min(high, len(skills)))
        return self.fake.random.sample(skills, count)

    def generate_engineers(self, num_engineers: int) -> List[Engineer]:
        """
        Generate a list of engineers with random skills.

        Args:
            num_engineers: Number of engineers to generate

        Returns:
            List[Engineer]: Generated engineers
        """
        engineers = []

        for i in range(num_engineers):
            part_time = self.fake.random.random() < self.config["part_time_ratio"]
            name = self.fake.name()
            engineer = Engineer(
                id=f"E{i + 1}",
                name=name,
                email=f"{name.lower().replace(' ', '.')}@example.com",
                skills=self._pick_skills(
                    self.config["skills_per_engineer_min"],
                    self.config["skills_per_engineer_max"],
                ),
                max_capacity=50 if part_time else 100,
                seniority=self.fake.random_element(list(Seniority)),
                department=self.fake.random_element(self.config["departments"]),
            )
            engineers.append(engineer)
            logger.debug(f"Created engineer: {engineer}")

        logger.info(f"Generated {len(engineers)} engineers.")
        return engineers

    def generate_projects(self, num_projects: int) -> List[Project]:
        """
        Generate a list of projects with random required skills.

        Args:
            num_projects: Number of projects to generate

        Returns:
            List[Project]: Generated projects
        """
        base_date = self.config["reference_date"]
        projects = []

        for i in range(num_projects):
            start = base_date + timedelta(days=self.fake.random_int(min=-90, max=30))
            project = Project(
                id=f"P{i + 1}",
                name=self.fake.catch_phrase(),
                required_skills=self._pick_skills(
                    self.config["skills_per_project_min"],
                    self.config["skills_per_project_max"],
                ),
                status=self.fake.random_element(list(ProjectStatus)),
                description=self.fake.sentence(),
                start_date=start,
                end_date=start + timedelta(days=self.fake.random_int(min=30, max=180)),
                team_size=self.fake.random_int(min=1, max=8),
            )
            projects.append(project)
            logger.debug(f"Created project: {project.id} {project.name}")

        logger.info(f"Generated {len(projects)} projects.")
        return projects

    def generate_assignments(
        self, engineers: List[Engineer], projects: List[Project]
    ) -> List[Assignment]:
        """
        Generate assignments that respect each engineer's capacity.

        Some assignments end before the reference date; these no longer
        count toward capacity and are not limited by it.

        Args:
            engineers: Engineers to assign
            projects: Projects to assign engineers to

        Returns:
            List[Assignment]: Generated assignments
        """
        if not projects:
            return []

        base_date = self.config["reference_date"]
        assignments = []

        for engineer in engineers:
            remaining = engineer.max_capacity
            count = self.fake.random_int(
                min=0, max=self.config["assignments_per_engineer_max"]
            )

            for _ in range(count):
                project = self.fake.random_element(projects)
                allocation = self.fake.random_element(self.config["allocation_choices"])
                ended = self.fake.random.random() < 0.25

                if ended:
                    start = base_date - timedelta(days=self.fake.random_int(min=60, max=120))
                    end = base_date - timedelta(days=self.fake.random_int(min=1, max=30))
                else:
                    if allocation > remaining:
                        continue
                    remaining -= allocation
                    start = base_date + timedelta(days=self.fake.random_int(min=-30, max=14))
                    end = start + timedelta(days=self.fake.random_int(min=30, max=120))

                assignment = Assignment(
                    id=f"A{len(assignments) + 1}",
                    engineer_id=engineer.id,
                    project_id=project.id,
                    allocation_percentage=allocation,
                    role=self.fake.random_element(["Developer", "Tech Lead", "Reviewer"]),
                    start_date=start,
                    end_date=end,
                )
                assignments.append(assignment)
                logger.debug(f"Created assignment: {assignment}")

        logger.info(f"Generated {len(assignments)} assignments.")
        return assignments

    def generate_scenario(
        self, num_engineers: int, num_projects: int
    ) -> Tuple[List[Engineer], List[Project], List[Assignment]]:
        """
        Generate a complete scenario with engineers, projects and assignments.

        Args:
            num_engineers: Number of engineers to generate
            num_projects: Number of projects to generate

        Returns:
            Tuple of generated engineers, projects and assignments
        """
        engineers = self.generate_engineers(num_engineers)
        projects = self.generate_projects(num_projects)
        assignments = self.generate_assignments(engineers, projects)
        return engineers, projects, assignments
