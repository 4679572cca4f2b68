from __future__ import annotations

from .models import (
    CollaborationResult,
    HeuristicsConfig,
    Metrics,
    ProjectContribution,
    RepoResult,
    RoleEvaluation,
    Stats,
)

ROLES = ("core_output", "sole_maintainer", "support", "collaborative_core", "versatile", "growth")

NARRATIVES = {
    "core_output": "The engine of the team: carries most of the development work and drives new features.",
    "sole_maintainer": "Guardian of independent modules: maintains and develops key areas largely alone.",
    "support": "The team's foundation: quietly takes on fixes, refactors and code cleanup.",
    "collaborative_core": "A bridge between projects: coordinates across several codebases and keeps them moving.",
    "versatile": "A well-rounded engineer: strong at building new things, maintaining them and working with others.",
    "growth": "Growing steadily: building experience through consistent contributions.",
}


def project_contribution(
    name: str,
    contribution_ratio: float,
    authors: int,
    commits: int,
    config: HeuristicsConfig,
) -> ProjectContribution:
    authors = max(1, int(authors))
    core_threshold = (100 / authors) * config.core_threshold_factor
    return ProjectContribution(
        name=name,
        contribution_ratio=contribution_ratio,
        authors=authors,
        commits=commits,
        core_threshold=core_threshold,
        is_core=contribution_ratio >= core_threshold,
    )


def contributions_for_results(results: list[RepoResult], config: HeuristicsConfig) -> list[ProjectContribution]:
    return [
        project_contribution(
            r.name,
            round(r.contribution_ratio, 1),
            r.project_stats.total_authors,
            r.stats.total_commits,
            config,
        )
        for r in results
    ]


def classify_role(
    stats: Stats,
    metrics: Metrics,
    collaboration: CollaborationResult,
    projects: list[ProjectContribution],
    contribution_ratio: float,
) -> RoleEvaluation:
    """Walk the role cascade; the first matching rule wins and `growth` always matches."""
    commits = stats.total_commits
    total_projects = len(projects) or 1
    fix_ratio = stats.fix_count / commits if commits > 0 else 0.0
    refactor_ratio = stats.style.get("refactor", 0) / commits if commits > 0 else 0.0
    innovation = metrics.innovation_ratio
    sole = collaboration.sole_maintenance_index

    core = [p for p in projects if p.is_core]
    core_count = len(core)
    core_commits = sum(p.commits for p in core)
    core_ratio = core_commits / commits * 100 if commits > 0 else 0.0

    evidence: list[str] = []
    if core_count > 0 and core_ratio >= 60 and innovation > 25:
        role = "core_output"
        if core_count == 1:
            evidence.append(f"Contributed {core[0].contribution_ratio:.1f}% of the commits in the core project")
        else:
            evidence.append(f"Above the core threshold in {core_count} projects")
            evidence.append(f"Core projects hold {core_ratio:.1f}% of all commits")
        evidence.append(f"Innovation ratio reached {innovation:.1f}%")
    elif sole > 55 and core_count > 0 and any(p.contribution_ratio > 30 for p in core):
        role = "sole_maintainer"
        evidence.append(f"Sole-maintenance index of {sole:.1f}%")
        if core_count == 1:
            evidence.append(f"Independently contributed {core[0].contribution_ratio:.1f}% of the core project")
        else:
            evidence.append(f"Drives independent development in {core_count} core projects")
    elif (fix_ratio > 0.3 or refactor_ratio > 0.25) and stats.total_deletions > stats.total_additions * 0.8:
        role = "support"
        if fix_ratio > 0.3:
            evidence.append(f"Fix commits make up {fix_ratio * 100:.1f}% of the total")
        if refactor_ratio > 0.25:
            evidence.append(f"Refactor commits make up {refactor_ratio * 100:.1f}% of the total")
        evidence.append(
            f"Removed {stats.total_deletions} lines against {stats.total_additions} added"
        )
    elif (
        total_projects >= 3
        and core_count < total_projects * 0.6
        and core_count >= 1
        and contribution_ratio > 15
    ):
        role = "collaborative_core"
        avg_contribution = sum(p.contribution_ratio for p in projects) / total_projects
        evidence.append(f"Contributed to {total_projects} projects")
        evidence.append(f"Core maintainer in {core_count} of them, supporting the rest")
        evidence.append(f"Average contribution ratio {avg_contribution:.1f}%")
    elif core_count >= 2 and innovation > 18 and sole > 25:
        role = "versatile"
        evidence.append(f"Core contributor in {core_count} projects")
        evidence.append(f"Innovation ratio {innovation:.1f}% with sole-maintenance index {sole:.1f}%")
    else:
        role = "growth"
        evidence.append(f"Made {commits} commits")
        if total_projects > 1:
            evidence.append(f"Contributed to {total_projects} projects")
            if core_count > 0:
                evidence.append(f"Core maintainer in {core_count} of them")

    return RoleEvaluation(
        role=role,
        narrative=NARRATIVES[role],
        evidence=tuple(evidence),
        contribution_ratio=contribution_ratio,
        sole_maintenance_index=sole,
        innovation_ratio=innovation,
        total_commits=commits,
        total_projects=total_projects,
        core_project_count=core_count,
        core_project_ratio=core_ratio,
    )
