"""ProjectService: visibility, PATCH semantics and members."""

from datetime import date

import pytest

from promsys.application.projects import ProjectInput
from promsys.container import get_project_repository, get_project_service
from promsys.crosscutting.exceptions import NotFoundError, ValidationFailedError

pytestmark = pytest.mark.unit


def test_update_applies_only_provided_fields(project):
    updated = get_project_service().update(
        project.id, ProjectInput(client_name="ACME", description=None), {"client_name"}
    )
    assert updated.client_name == "ACME"
    assert updated.name == "Road Map"


def test_rejected_update_leaves_project_untouched(project):
    with pytest.raises(ValidationFailedError):
        get_project_service().update(
            project.id,
            ProjectInput(
                name="Renamed",
                start_date=date(2024, 6, 1),
                end_date=date(2024, 5, 1),
            ),
            {"name", "start_date", "end_date"},
        )
    stored = get_project_repository().get(project.id)
    assert stored.name == "Road Map"
    assert stored.start_date is None
    assert stored.end_date is None


def test_blank_name_is_rejected(project):
    with pytest.raises(ValidationFailedError):
        get_project_service().update(project.id, ProjectInput(name="  "), {"name"})


def test_members_see_their_projects(project, employee, finance):
    service = get_project_service()
    assert service.get_visible(employee, project.id).id == project.id
    with pytest.raises(NotFoundError):
        service.get_visible(finance, project.id)
