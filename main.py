"""
Command-line entry point for the engineer allocation system.
"""
import argparse
import json
import logging
import os
import sys
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional

from analysis.metrics import UtilizationReporter, compute_team_metrics
from analysis.overview import (
    assignments_for_engineer,
    build_team_overview,
    overview_to_dataframe,
    unique_skills,
)
from assignment.validator import AssignmentValidator
from capacity.calculator import CapacityCalculator, find_overallocated
from config import AppConfig
from models import Assignment, Engineer, Project
from session import InMemorySession, SessionProvider, User
from utils.errors import InputError
from utils.generators import DataGenerator
from utils.logger import logger, setup_logger
from utils.validators import parse_date
from visualization import export_to_excel, plot_engineer_allocations, plot_team_capacity


@dataclass
class Dataset:
    """Records handed to the engine by the persistence layer."""

    engineers: List[Engineer] = field(default_factory=list)
    projects: List[Project] = field(default_factory=list)
    assignments: List[Assignment] = field(default_factory=list)
    session: SessionProvider = field(default_factory=InMemorySession)

    def engineer(self, engineer_id: str) -> Engineer:
        for engineer in self.engineers:
            if engineer.id == engineer_id:
                return engineer
        raise InputError(f"Unknown engineer {engineer_id!r}")

    def project(self, project_id: str) -> Project:
        for project in self.projects:
            if project.id == project_id:
                return project
        raise InputError(f"Unknown project {project_id!r}")

    @property
    def projects_by_id(self) -> Dict[str, Project]:
        return {p.id: p for p in self.projects}


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """
    Load configuration from file or use defaults.

    Args:
        config_path: Path to configuration file

    Returns:
        AppConfig: Application configuration
    """
    if config_path and os.path.exists(config_path):
        try:
            with open(config_path, "r") as f:
                config_dict = json.load(f)
            if not isinstance(config_dict, dict):
                raise InputError("configuration file must hold a JSON object")
            return AppConfig.from_dict(config_dict)
        except (OSError, ValueError) as e:
            logger.error(f"Error loading config from {config_path}: {e}")
            logger.info("Using default configuration.")
            return AppConfig()
    else:
        return AppConfig()


def _records(data: Dict[str, Any], key: str) -> List[Dict[str, Any]]:
    records = data.get(key) or []
    if not isinstance(records, list):
        raise InputError(f"dataset {key!r} must be a list, got {type(records).__name__}")
    for record in records:
        if not isinstance(record, dict):
            raise InputError(f"dataset {key!r} must hold objects, got {record!r}")
    return records


def dataset_from_dict(data: Dict[str, Any], config: AppConfig) -> Dataset:
    """Build a dataset from the JSON document layout."""
    if not isinstance(data, dict):
        raise InputError(f"dataset must be a JSON object, got {type(data).__name__}")

    default_max = config.capacity.default_max_capacity
    session = InMemorySession()
    session_data = data.get("session") or {}
    if not isinstance(session_data, dict):
        raise InputError("dataset 'session' must be an object")
    if session_data.get("user") and session_data.get("token"):
        if not isinstance(session_data["user"], dict):
            raise InputError("dataset session 'user' must be an object")
        session.login(session_data["token"], User.from_dict(session_data["user"]))

    return Dataset(
        engineers=[Engineer.from_dict(r, default_max) for r in _records(data, "engineers")],
        projects=[Project.from_dict(r) for r in _records(data, "projects")],
        assignments=[Assignment.from_dict(r) for r in _records(data, "assignments")],
        session=session,
    )


def load_dataset(
    data_path: Optional[str],
    config: AppConfig,
    reference_date: date,
    seed: int = 42,
) -> Dataset:
    """
    Load a dataset from a JSON file, or generate a sample one.

    Args:
        data_path: Path to a JSON file with engineers, projects and assignments
        config: Application configuration
        reference_date: Date the generated sample data is placed around
        seed: Seed for the sample data generator

    Returns:
        Dataset: Loaded or generated records
    """
    if data_path:
        with open(data_path, "r") as f:
            data = json.load(f)
        dataset = dataset_from_dict(data, config)
        logger.info(
            f"Loaded {len(dataset.engineers)} engineers, {len(dataset.projects)} projects "
            f"and {len(dataset.assignments)} assignments from {data_path}"
        )
        return dataset

    logger.info("No dataset given, generating sample data...")
    generator = DataGenerator(seed=seed, reference_date=reference_date)
    engineers, projects, assignments = generator.generate_scenario(12, 6)
    session = InMemorySession()
    if engineers:
        first = engineers[0]
        session.login(
            "sample-token",
            User(id=first.id, email=first.email, name=first.name, role="engineer"),
        )
    return Dataset(engineers, projects, assignments, session)


def run_overview(dataset: Dataset, config: AppConfig, on_date: date, args) -> int:
    rows = build_team_overview(
        dataset.engineers,
        dataset.assignments,
        on_date,
        skill=args.skill,
        search=args.search,
        reporter=UtilizationReporter(config.utilization),
    )
    if not rows:
        print("No engineers found.")
        return 0

    print(overview_to_dataframe(rows).to_string(index=False))
    print()
    print(f"Skills: {', '.join(unique_skills(dataset.engineers))}")
    print(json.dumps(compute_team_metrics(rows), indent=2))

    overallocated = find_overallocated(dataset.engineers, dataset.assignments, on_date)
    if overallocated:
        logger.warning(f"Over-allocated engineers: {', '.join(overallocated)}")

    if args.plot:
        plot_team_capacity(rows, filename=args.plot)
    if args.excel:
        export_to_excel(args.excel, rows, dataset.projects_by_id)
    return 0


def run_capacity(dataset: Dataset, config: AppConfig, on_date: date, args) -> int:
    engineer = dataset.engineer(args.engineer_id)
    own = assignments_for_engineer(engineer.id, dataset.assignments)
    info = CapacityCalculator().compute(engineer, own, on_date)
    print(json.dumps(info.to_dict(), indent=2))
    return 0


def run_validate(dataset: Dataset, config: AppConfig, on_date: date, args) -> int:
    engineer = dataset.engineer(args.engineer_id)
    project = dataset.project(args.project_id)
    own = assignments_for_engineer(engineer.id, dataset.assignments)

    result = AssignmentValidator().validate(engineer, project, own, args.allocation, on_date)
    print(json.dumps(dict(result), indent=2))
    return 0 if result.is_valid else 1


def run_my_assignments(dataset: Dataset, config: AppConfig, on_date: date, args) -> int:
    user = dataset.session.get_current_user()
    if user is None:
        logger.error("Not authenticated.")
        return 1
    if not user.is_engineer:
        logger.error(f"User {user.id} is not an engineer.")
        return 1

    own = assignments_for_engineer(user.id, dataset.assignments)
    if not own:
        print("No assignments found.")
        return 0

    projects = dataset.projects_by_id
    for a in own:
        project = projects.get(a.project_id)
        print(
            f"{project.name if project else a.project_id:<40} "
            f"{a.role or '-':<12} {a.allocation_percentage:>3}%  "
            f"{a.start_date or '-'} -> {a.end_date or '-'}"
        )

    if args.plot:
        plot_engineer_allocations(own, projects, filename=args.plot)
    return 0


COMMANDS = {
    "overview": run_overview,
    "capacity": run_capacity,
    "validate": run_validate,
    "my-assignments": run_my_assignments,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Engineer capacity and assignment allocation"
    )
    parser.add_argument("--config", help="Path to configuration file")
    parser.add_argument("--data", help="Path to JSON dataset (sample data if omitted)")
    parser.add_argument("--date", help="Evaluation date, YYYY-MM-DD (default: today)")
    parser.add_argument("--seed", type=int, default=42, help="Seed for sample data")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Set the logging level",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    overview = subparsers.add_parser("overview", help="Show team utilization")
    overview.add_argument("--skill", help="Only engineers with this skill")
    overview.add_argument("--search", help="Filter by name, email or department")
    overview.add_argument("--plot", help="Save a capacity chart to this file")
    overview.add_argument("--excel", help="Export the overview to this Excel file")

    capacity = subparsers.add_parser("capacity", help="Show an engineer's capacity")
    capacity.add_argument("engineer_id")

    validate = subparsers.add_parser("validate", help="Validate a proposed assignment")
    validate.add_argument("engineer_id")
    validate.add_argument("project_id")
    validate.add_argument("allocation", type=int)

    mine = subparsers.add_parser("my-assignments", help="Show the current user's assignments")
    mine.add_argument("--plot", help="Save an allocation chart to this file")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main application entry point."""
    args = build_parser().parse_args(argv)

    config = load_config(args.config)
    log_level = getattr(logging, args.log_level or config.log_level.upper(), logging.INFO)
    setup_logger(level=log_level)

    try:
        on_date = parse_date(args.date, "--date") or date.today()
        dataset = load_dataset(args.data, config, on_date, seed=args.seed)
        return COMMANDS[args.command](dataset, config, on_date, args)
    except InputError as e:
        logger.error(f"Invalid input: {e}")
        return 2
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Error loading dataset from {args.data}: {e}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
