"""Tests for the ChangeTracker ledger and ChangeTrackableMixin models."""

from __future__ import annotations

from typing import Optional

import pytest
from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import Mapped, Session, mapped_column, sessionmaker

from app.Models.BaseModel import BaseModel
from app.Traits.ChangeTrackable import ChangeTrackableMixin, ChangeTracker, listen_for_change_tracking


class UserColumns:
    name: Mapped[str] = mapped_column(String(100))
    email: Mapped[str] = mapped_column(String(255))
    age: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    plays_guitar: Mapped[bool] = mapped_column(Boolean)


class ChangeTrackableTestUser(UserColumns, BaseModel, ChangeTrackableMixin):
    __tablename__ = 'change_trackable_users'
    __casts__ = {
        'name': 'string',
        'email': 'string',
        'age': 'integer',
        'plays_guitar': 'boolean',
    }


class AgeTrackableTestUser(UserColumns, BaseModel, ChangeTrackableMixin):
    __tablename__ = 'age_trackable_users'
    __casts__ = ChangeTrackableTestUser.__casts__
    __trackable__ = ['age']


MARTY = {
    'id': '01HZZZZZZZZZZZZZZZZZZZZZZ1',
    'name': 'Marty',
    'email': 'martymc@thrashermagazine.com',
    'age': 50,
    'plays_guitar': True,
}


class TestChangeTracker:
    """The ledger on its own, fed explicit dirty maps."""

    def test_first_change_creates_entry(self) -> None:
        tracker = ChangeTracker()
        tracker.track({'name': 'Calvin Klein'}, {'name': 'Marty'}.get)

        assert tracker.changes() == {'name': {'old': 'Marty', 'new': 'Calvin Klein'}}

    def test_old_value_is_kept_across_cycles(self) -> None:
        tracker = ChangeTracker()
        tracker.track({'age': 51}, {'age': 50}.get)
        tracker.track({'age': 52}, {'age': 51}.get)

        assert tracker.changes()['age'] == {'old': 50, 'new': 52}

    def test_equal_values_are_not_tracked(self) -> None:
        tracker = ChangeTracker()
        tracker.track({'age': 50}, {'age': 50}.get)

        assert tracker.changes_for_all() == {}

    def test_comparison_is_type_sensitive(self) -> None:
        tracker = ChangeTracker()
        tracker.track({'flag': True, 'count': 1.0}, {'flag': 1, 'count': 1}.get)

        assert tracker.changes_for_all() == {
            'count': {'old': 1, 'new': 1.0},
            'flag': {'old': 1, 'new': True},
        }

    def test_ledger_is_sorted_by_attribute(self) -> None:
        tracker = ChangeTracker()
        tracker.track_change('name', 'a', 'b')
        tracker.track_change('Zeta', 'a', 'b')
        tracker.track_change('age', 1, 2)

        assert list(tracker.changes_for_all()) == ['Zeta', 'age', 'name']

    def test_allow_list_filters_changes(self) -> None:
        tracker = ChangeTracker(trackable=['age'])
        tracker.track_change('name', 'Marty', 'Calvin Klein')

        assert tracker.changes() == {}
        assert tracker.has_changes() is False
        assert tracker.has_any_changes() is True
        assert tracker.changes_for_all() == {'name': {'old': 'Marty', 'new': 'Calvin Klein'}}

    def test_single_attribute_name_as_string(self) -> None:
        tracker = ChangeTracker(trackable='age')
        tracker.track_change('age', 50, 51)
        tracker.track_change('name', 'Marty', 'Calvin Klein')

        assert tracker.trackable == ['age']
        assert tracker.changes() == {'age': {'old': 50, 'new': 51}}
        assert tracker.changes_for('name') == {'name': {'old': 'Marty', 'new': 'Calvin Klein'}}
        assert tracker.has_any_changes_for('age') is True
        assert tracker.has_any_changes_for('a') is False

    def test_changes_for_empty_list_returns_everything(self) -> None:
        tracker = ChangeTracker(trackable=['age'])
        tracker.track_change('name', 'Marty', 'Calvin Klein')

        assert tracker.changes_for([]) == tracker.changes_for_all()

    def test_has_any_changes_for_empty_list_is_false(self) -> None:
        tracker = ChangeTracker()
        tracker.track_change('name', 'Marty', 'Calvin Klein')

        assert tracker.has_any_changes_for([]) is False
        assert tracker.has_any_changes_for(['name', 'age']) is True
        assert tracker.has_any_changes_for(['age']) is False

    def test_changes_for_explicit_names(self) -> None:
        tracker = ChangeTracker()
        tracker.track_change('name', 'Marty', 'Calvin Klein')
        tracker.track_change('age', 50, 51)

        assert tracker.changes_for(['age', 'email']) == {'age': {'old': 50, 'new': 51}}

    def test_returned_ledger_cannot_mutate_tracker(self) -> None:
        tracker = ChangeTracker()
        tracker.track_change('age', 50, 51)

        tracker.changes()['age']['new'] = 99
        tracker.changes_for_all().clear()

        assert tracker.changes() == {'age': {'old': 50, 'new': 51}}

    def test_clear(self) -> None:
        tracker = ChangeTracker()
        tracker.track_change('age', 50, 51)
        tracker.clear()
        tracker.track_change('age', 51, 52)

        assert tracker.changes() == {'age': {'old': 51, 'new': 52}}

    def test_format_with_quotes(self) -> None:
        changes = {'name': {'old': 'Marty', 'new': 'Calvin Klein'}}

        assert ChangeTracker.format(
            changes, '{attribute} was changed from "{old}" to "{new}"', ' | '
        ) == 'name was changed from "Marty" to "Calvin Klein"'

    def test_format_joins_in_ledger_order(self) -> None:
        tracker = ChangeTracker()
        tracker.track_change('name', 'Marty', 'Calvin Klein')
        tracker.track_change('age', 50, 51)

        assert tracker.changes_string() == 'age: 50 > 51 | name: Marty > Calvin Klein'
        assert tracker.changes_string_for(['name'], '{new}') == 'Calvin Klein'

    def test_format_label_and_sentinels(self) -> None:
        tracker = ChangeTracker()
        tracker.track_change('middle_name', None, 'George')
        tracker.track_change('nick_name', 'Doc', '')

        assert tracker.changes_string_for_all('{label}: {old} -> {new}', '; ', '(none)', '(removed)') == (
            'Middle Name: (none) -> George; Nick Name: Doc -> (removed)'
        )

    def test_format_does_not_expand_placeholders_inside_values(self) -> None:
        tracker = ChangeTracker()
        tracker.track_change('note', '{new}', 'plain')

        assert tracker.changes_string() == 'note: {new} > plain'

    def test_format_of_nothing_is_empty(self) -> None:
        assert ChangeTracker().changes_string() == ''


class TestChangeTrackableModel:
    """Change tracking driven by SQLAlchemy attribute history."""

    @pytest.fixture
    def user(self, session_factory: sessionmaker[Session], db: Session) -> ChangeTrackableTestUser:
        with session_factory() as seed:
            seed.add(ChangeTrackableTestUser(**MARTY))
            seed.commit()

        listen_for_change_tracking(db)
        user = db.get(ChangeTrackableTestUser, MARTY['id'])
        assert user is not None
        return user

    @pytest.fixture
    def age_user(self, session_factory: sessionmaker[Session], db: Session) -> AgeTrackableTestUser:
        with session_factory() as seed:
            seed.add(AgeTrackableTestUser(**MARTY))
            seed.commit()

        listen_for_change_tracking(db)
        user = db.get(AgeTrackableTestUser, MARTY['id'])
        assert user is not None
        return user

    def test_nothing_tracked(self, user: ChangeTrackableTestUser, db: Session) -> None:
        assert user.get_tracked_changes_array() == {}
        assert user.get_tracked_changes_array_for(['email']) == {}
        assert user.get_tracked_changes_array_for_all() == {}
        assert user.get_tracked_changes() == ''
        assert user.get_tracked_changes_for(['email']) == ''

        db.commit()

        assert user.get_tracked_changes_array() == {}
        assert user.get_tracked_changes_array_for_all() == {}
        assert user.has_any_tracked_changes() is False

    def test_get_tracked_changes_array(self, user: ChangeTrackableTestUser, db: Session) -> None:
        user.name = 'Calvin Klein'

        # Nothing is tracked until the model is saved
        assert user.get_tracked_changes_array() == {}

        db.commit()

        assert user.get_tracked_changes_array() == {
            'name': {'old': 'Marty', 'new': 'Calvin Klein'},
        }

        user.age = 51

        assert user.get_tracked_changes_array() == {
            'name': {'old': 'Marty', 'new': 'Calvin Klein'},
        }

        db.commit()

        assert user.get_tracked_changes_array() == {
            'age': {'old': 50, 'new': 51},
            'name': {'old': 'Marty', 'new': 'Calvin Klein'},
        }
        assert list(user.get_tracked_changes_array()) == ['age', 'name']

    def test_old_value_survives_repeated_saves(self, user: ChangeTrackableTestUser, db: Session) -> None:
        user.age = 51
        db.commit()
        user.age = 52
        db.commit()

        assert user.get_tracked_changes_array()['age'] == {'old': 50, 'new': 52}

    def test_first_change_in_a_later_save_is_tracked(self, user: ChangeTrackableTestUser, db: Session) -> None:
        user.age = 51
        db.commit()
        user.name = 'Calvin Klein'
        db.commit()

        assert user.get_tracked_changes_array_for_all() == {
            'age': {'old': 50, 'new': 51},
            'name': {'old': 'Marty', 'new': 'Calvin Klein'},
        }

    def test_original_value_after_expiry(self, user: ChangeTrackableTestUser, db: Session) -> None:
        db.expire(user)
        user.name = 'Calvin Klein'

        assert user.get_original_attribute_value('name') == 'Marty'
        assert user.get_original_attribute_value('age') == 50

    def test_setting_the_same_value_is_not_a_change(self, user: ChangeTrackableTestUser, db: Session) -> None:
        user.name = 'Marty'
        user.plays_guitar = True
        db.commit()

        assert user.has_any_tracked_changes() is False

    def test_age_trackable_user(self, age_user: AgeTrackableTestUser, db: Session) -> None:
        age_user.name = 'Calvin Klein'
        db.commit()

        # Name is not in the allow-list
        assert age_user.get_tracked_changes_array() == {}
        assert age_user.has_tracked_changes() is False
        assert age_user.get_tracked_changes_array_for_all() == {
            'name': {'old': 'Marty', 'new': 'Calvin Klein'},
        }

        age_user.age = 51
        db.commit()

        assert age_user.get_tracked_changes_array() == {'age': {'old': 50, 'new': 51}}
        assert age_user.has_tracked_changes() is True
        assert age_user.has_any_tracked_changes_for(['name']) is True
        assert age_user.has_any_tracked_changes_for([]) is False

    def test_string_accessors(self, age_user: AgeTrackableTestUser, db: Session) -> None:
        age_user.name = 'Calvin Klein'
        age_user.age = 51
        age_user.plays_guitar = False
        db.commit()

        assert age_user.get_tracked_changes() == 'age: 50 > 51'
        assert age_user.get_tracked_changes_for(['plays_guitar'], '{label} changed to {new}') == (
            'Plays Guitar changed to False'
        )
        assert age_user.get_tracked_changes_for_all('{attribute}', ',') == 'age,name,plays_guitar'

    def test_cleared_value_uses_sentinel(self, user: ChangeTrackableTestUser, db: Session) -> None:
        user.age = None
        db.commit()

        assert user.get_tracked_changes_array() == {'age': {'old': 50, 'new': None}}
        assert user.get_tracked_changes('{attribute}: {old} > {new}', empty_new='unknown') == 'age: 50 > unknown'

    def test_original_attribute_value_is_cast(self, user: ChangeTrackableTestUser) -> None:
        user.age = 60

        assert user.get_original_attribute_value('age') == 50
        assert user.get_original_attribute_value('plays_guitar') is True

    def test_explicit_track_changes_without_listener(
        self, session_factory: sessionmaker[Session]
    ) -> None:
        with session_factory() as seed:
            seed.add(ChangeTrackableTestUser(**MARTY))
            seed.commit()

        with session_factory() as session:
            user = session.get(ChangeTrackableTestUser, MARTY['id'])
            assert user is not None

            user.email = 'marty@hillvalley.example'
            user.track_changes()
            session.commit()

            # Committed without tracking; the ledger keeps the first capture
            user.email = 'marty@1985.example'
            session.commit()

            assert user.get_tracked_changes_array() == {
                'email': {'old': 'martymc@thrashermagazine.com', 'new': 'marty@hillvalley.example'},
            }

    def test_new_instances_track_from_nothing(self, db: Session) -> None:
        listen_for_change_tracking(db)
        user = AgeTrackableTestUser(id='01HZZZZZZZZZZZZZZZZZZZZZZ2', name='Doc', email='doc@example.com',
                                    age=65, plays_guitar=False)
        db.add(user)
        db.commit()

        assert user.get_tracked_changes_array() == {'age': {'old': None, 'new': 65}}

    def test_clear_tracked_changes(self, user: ChangeTrackableTestUser, db: Session) -> None:
        user.age = 51
        db.commit()
        user.clear_tracked_changes()

        assert user.has_any_tracked_changes() is False
