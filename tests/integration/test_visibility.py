from bizcrm.db import models, visibility


def _ctx(manager):
    return {"id": manager.manager_id, "role": manager.role}


def test_subordinates_are_collected_transitively(db_session, manager_factory):
    head = manager_factory("head")
    lead = manager_factory("head", supervisors=[head])
    rep = manager_factory("manager", supervisors=[lead])
    outsider = manager_factory("manager")

    ids = visibility.get_subordinate_ids(db_session, head.manager_id)
    assert set(ids) == {lead.manager_id, rep.manager_id}
    assert outsider.manager_id not in ids
    assert head.manager_id not in ids


def test_cycles_terminate(db_session, manager_factory):
    a = manager_factory("head")
    b = manager_factory("head", supervisors=[a])
    a.supervisors = [b]
    db_session.commit()

    assert visibility.get_subordinate_ids(db_session, a.manager_id) == [b.manager_id]
    assert visibility.get_subordinate_ids(db_session, b.manager_id) == [a.manager_id]


def test_visible_sets_per_role(db_session, manager_factory):
    admin = manager_factory("admin")
    head = manager_factory("head")
    rep = manager_factory("manager", supervisors=[head])

    assert visibility.visible_manager_ids(db_session, _ctx(admin)) is None
    assert visibility.visible_manager_ids(db_session, _ctx(head)) == {head.manager_id, rep.manager_id}
    assert visibility.visible_manager_ids(db_session, _ctx(rep)) == {rep.manager_id}
    assert visibility.visible_manager_ids(db_session, None) == set()
    assert visibility.visible_manager_ids(db_session, {"id": 1, "role": "ghost"}) == set()


def test_project_filter_includes_secondary_managers(db_session, manager_factory, project_factory):
    owner = manager_factory("manager")
    helper = manager_factory("manager")
    stranger = manager_factory("manager")
    project = project_factory(owner, secondary=[helper])

    def visible_to(manager):
        query = db_session.query(models.Project)
        allowed = visibility.visible_manager_ids(db_session, _ctx(manager))
        return [p.project_id for p in visibility.apply_project_filter(query, allowed).all()]

    assert visible_to(owner) == [project.project_id]
    assert visible_to(helper) == [project.project_id]
    assert visible_to(stranger) == []
