"""Tests for milestone submission, visibility and review."""

from datetime import date

import pytest

from memorials.exceptions import AccessDenied, ContentNotFound, InvalidTransition
from timeline import services
from timeline.models import ApprovalStatus, Milestone


@pytest.mark.django_db
class TestSubmitMilestone:

    def test_owner_submission_is_approved(self, access, owner):
        milestone = services.submit_milestone(access(owner), 'Born', event_date=date(1930, 4, 2))
        assert milestone.status == ApprovalStatus.APPROVED

    def test_contributor_submission_is_pending(self, access, contributor):
        milestone = services.submit_milestone(access(contributor), 'First job')
        assert milestone.status == ApprovalStatus.PENDING
        assert milestone.submitted_by == contributor

    def test_visitor_cannot_submit(self, access, visitor):
        with pytest.raises(AccessDenied):
            services.submit_milestone(access(visitor), 'Nope')


@pytest.mark.django_db
class TestTimelineVisibility:

    @pytest.fixture
    def milestones(self, access, owner, contributor, user_factory, memorial):
        approved = services.submit_milestone(access(owner), 'Wedding', event_date=date(1955, 6, 1))
        pending = services.submit_milestone(access(contributor), 'Garden prize', event_date=date(1980, 1, 1))
        undated = services.submit_milestone(access(owner), 'Favourite song')
        early = services.submit_milestone(access(owner), 'Born', event_date=date(1930, 4, 2))
        return {'approved': approved, 'pending': pending, 'undated': undated, 'early': early}

    def test_owner_sees_everything_in_order(self, access, owner, milestones):
        titles = [m.title for m in services.list_timeline(access(owner))]
        assert titles == ['Born', 'Wedding', 'Garden prize', 'Favourite song']

    def test_visitor_sees_only_approved(self, access, visitor, milestones):
        titles = [m.title for m in services.list_timeline(access(visitor))]
        assert titles == ['Born', 'Wedding', 'Favourite song']

    def test_submitter_sees_own_pending(self, access, contributor, milestones):
        titles = [m.title for m in services.list_timeline(access(contributor))]
        assert 'Garden prize' in titles

    def test_other_contributor_does_not_see_pending(self, access, memorial, owner, user_factory, milestones):
        from memorials.services import add_participant
        other = user_factory('other')
        add_participant(access(owner), other.email, 'contributor')
        titles = [m.title for m in services.list_timeline(access(other))]
        assert 'Garden prize' not in titles
        with pytest.raises(ContentNotFound):
            services.get_milestone(access(other), milestones['pending'].pk)

    def test_pending_listing_is_owner_only(self, access, owner, contributor, milestones):
        assert [m.title for m in services.list_pending(access(owner))] == ['Garden prize']
        with pytest.raises(AccessDenied):
            services.list_pending(access(contributor))


@pytest.mark.django_db
class TestReviewMilestone:

    @pytest.fixture
    def pending(self, access, contributor):
        return services.submit_milestone(access(contributor), 'Moved to the coast')

    def test_owner_approves(self, access, owner, pending):
        milestone = services.review_milestone(access(owner), pending.pk, approve=True)
        assert milestone.status == ApprovalStatus.APPROVED
        assert milestone.reviewed_by == owner
        assert milestone.reviewed_at is not None

    def test_owner_rejects(self, access, owner, pending):
        milestone = services.review_milestone(access(owner), pending.pk, approve=False)
        assert milestone.status == ApprovalStatus.REJECTED

    def test_second_review_is_invalid(self, access, owner, pending):
        services.review_milestone(access(owner), pending.pk, approve=False)
        with pytest.raises(InvalidTransition):
            services.review_milestone(access(owner), pending.pk, approve=True)
        assert Milestone.objects.get(pk=pending.pk).status == ApprovalStatus.REJECTED

    def test_contributor_cannot_review(self, access, contributor, pending):
        with pytest.raises(AccessDenied):
            services.review_milestone(access(contributor), pending.pk, approve=True)


@pytest.mark.django_db
class TestEditMilestone:

    def test_submitter_edits_while_pending(self, access, contributor):
        milestone = services.submit_milestone(access(contributor), 'Typo')
        services.update_milestone(access(contributor), milestone, title='Fixed')
        assert Milestone.objects.get(pk=milestone.pk).title == 'Fixed'

    def test_submitter_cannot_edit_after_review(self, access, owner, contributor):
        milestone = services.submit_milestone(access(contributor), 'Typo')
        milestone = services.review_milestone(access(owner), milestone.pk, approve=True)
        with pytest.raises(AccessDenied):
            services.update_milestone(access(contributor), milestone, title='Fixed')

    def test_contributor_cannot_edit_others(self, access, owner, contributor):
        milestone = services.submit_milestone(access(owner), 'Owner story')
        with pytest.raises(AccessDenied):
            services.delete_milestone(access(contributor), milestone)

    def test_owner_deletes_any(self, access, owner, contributor):
        milestone = services.submit_milestone(access(contributor), 'Remove me')
        services.delete_milestone(access(owner), milestone)
        assert not Milestone.objects.filter(pk=milestone.pk).exists()


@pytest.mark.django_db
class TestTimelineApi:

    def test_submit_and_list(self, client_for, contributor, memorial):
        client = client_for(contributor)
        response = client.post(
            f'/api/memorials/{memorial.pk}/milestones/',
            {'title': 'Graduation', 'event_date': '1952-06-15'},
            format='json',
        )
        assert response.status_code == 201
        assert response.data['status'] == 'pending'
        listing = client.get(f'/api/memorials/{memorial.pk}/milestones/')
        assert [m['title'] for m in listing.data] == ['Graduation']

    def test_title_is_required(self, client_for, owner, memorial):
        response = client_for(owner).post(f'/api/memorials/{memorial.pk}/milestones/', {}, format='json')
        assert response.status_code == 400

    def test_visitor_submit_is_403(self, client_for, visitor, memorial):
        response = client_for(visitor).post(
            f'/api/memorials/{memorial.pk}/milestones/', {'title': 'x'}, format='json',
        )
        assert response.status_code == 403

    def test_approve_and_conflict(self, client_for, access, owner, contributor):
        milestone = services.submit_milestone(access(contributor), 'Retired')
        client = client_for(owner)
        response = client.post(f'/api/milestones/{milestone.pk}/approve/')
        assert response.status_code == 200
        assert response.data['status'] == 'approved'
        response = client.post(f'/api/milestones/{milestone.pk}/reject/')
        assert response.status_code == 409

    def test_stranger_gets_404_on_item(self, client_for, access, owner, stranger):
        milestone = services.submit_milestone(access(owner), 'Private')
        response = client_for(stranger).patch(
            f'/api/milestones/{milestone.pk}/', {'title': 'x'}, format='json',
        )
        assert response.status_code == 404

    def test_visitor_cannot_see_pending_item(self, client_for, access, contributor, visitor):
        milestone = services.submit_milestone(access(contributor), 'Pending story')
        response = client_for(visitor).delete(f'/api/milestones/{milestone.pk}/')
        assert response.status_code == 404
