"""
Calendar placement and drag-and-drop rescheduling tests
"""
from datetime import date, datetime

import pytest

from handyops.errors import BackendUnavailableError, ValidationError
from handyops.scheduling import (
    DAY,
    MONTH,
    WEEK,
    CalendarView,
    ScheduleBoard,
    drop_target,
    month_grid,
    time_grid,
)


class TestCalendarView:
    """Test view navigation"""

    def test_month_navigation_clamps_day(self):
        view = CalendarView(date(2024, 1, 31), MONTH)
        assert view.next().current_date == date(2024, 2, 29)
        assert view.previous().current_date == date(2023, 12, 31)

    def test_week_and_day_navigation(self):
        assert CalendarView(date(2024, 3, 15), WEEK).next().current_date == date(2024, 3, 22)
        assert CalendarView(date(2024, 3, 1), DAY).previous().current_date == date(2024, 2, 29)

    def test_today_keeps_view_mode(self, clock):
        view = CalendarView(date(2023, 6, 1), WEEK).today(clock)
        assert view.current_date == clock.now.date()
        assert view.view_mode == WEEK

    def test_unknown_view_mode(self):
        with pytest.raises(ValidationError):
            CalendarView(date(2024, 3, 15), 'year')

    def test_week_starts_on_sunday(self):
        days = CalendarView(date(2024, 3, 15), WEEK).visible_days()
        assert days[0] == date(2024, 3, 10)
        assert days[-1] == date(2024, 3, 16)


class TestMonthGrid:
    """Test the six-week month grid"""

    def test_grid_covers_six_weeks_with_adjacent_days(self):
        weeks = month_grid(CalendarView(date(2024, 3, 15), MONTH), [], today=date(2024, 3, 15))
        assert len(weeks) == 6 and all(len(week) == 7 for week in weeks)
        assert weeks[0][0].date == date(2024, 2, 25)
        assert weeks[0][0].in_month is False
        assert weeks[0][5].date == date(2024, 3, 1)

    def test_cells_show_three_jobs_and_overflow(self):
        jobs = [
            {'id': str(i), 'scheduled_date': datetime(2024, 3, 15, 8 + i)}
            for i in range(5)
        ]
        weeks = month_grid(CalendarView(date(2024, 3, 1), MONTH), jobs)
        cell = next(c for week in weeks for c in week if c.date == date(2024, 3, 15))
        assert [job['id'] for job in cell.jobs] == ['0', '1', '2']
        assert cell.overflow == 2


class TestTimeGrid:
    """Test week and day hourly slots"""

    def test_job_lands_in_its_hour(self):
        jobs = [{'id': 'a', 'scheduled_date': datetime(2024, 3, 15, 14, 30)}]
        columns = time_grid(CalendarView(date(2024, 3, 15), DAY), jobs)
        assert len(columns) == 1
        slots = {slot.hour: slot.jobs for slot in columns[0].slots}
        assert list(slots) == list(range(7, 19))
        assert [job['id'] for job in slots[14]] == ['a']

    def test_off_hours_jobs_are_not_dropped(self):
        jobs = [{'id': 'early', 'scheduled_date': datetime(2024, 3, 15, 5)}]
        columns = time_grid(CalendarView(date(2024, 3, 15), WEEK), jobs)
        friday = next(c for c in columns if c.date == date(2024, 3, 15))
        assert [job['id'] for job in friday.unslotted] == ['early']


class TestDropTarget:
    """Test where a drop puts a job"""

    def test_day_drop_is_nine_am(self):
        assert drop_target('2024-03-20') == datetime(2024, 3, 20, 9, 0)

    def test_slot_drop_zeroes_minutes(self):
        assert drop_target(date(2024, 3, 20), 14) == datetime(2024, 3, 20, 14, 0)

    @pytest.mark.parametrize('hour', [24, -1, '9', 9.5, True])
    def test_bad_hour(self, hour):
        with pytest.raises(ValidationError):
            drop_target('2024-03-20', hour)

    def test_bad_date(self):
        with pytest.raises(ValidationError):
            drop_target('next tuesday')


class TestScheduleBoard:
    """Test optimistic moves with rollback"""

    def test_month_drop_keeps_other_fields(self, jobs, make_job, clock):
        job = make_job(scheduled_date=datetime(2024, 3, 15, 13, 45))
        board = ScheduleBoard(jobs, jobs.list_jobs())

        moved = board.move_job(job['id'], '2024-03-22')

        assert moved['scheduled_date'] == datetime(2024, 3, 22, 9, 0)
        assert moved['updated_at'] == clock.now
        for field in ('client_name', 'price', 'status', 'address'):
            assert moved[field] == job[field]
        assert jobs.get_job(job['id'])['scheduled_date'] == datetime(2024, 3, 22, 9, 0)
        assert board.pending is None

    def test_failed_move_reverts(self, jobs, make_job, job_store):
        job = make_job(scheduled_date=datetime(2024, 3, 15, 13, 45))
        other = make_job(scheduled_date=datetime(2024, 3, 16, 9))
        board = ScheduleBoard(jobs, jobs.list_jobs())
        job_store.fail_on.add('update')

        with pytest.raises(BackendUnavailableError):
            board.move_job(job['id'], '2024-03-22', 10)

        assert board.get(job['id'])['scheduled_date'] == datetime(2024, 3, 15, 13, 45)
        assert sorted(j['id'] for j in board.jobs) == sorted([job['id'], other['id']])
        assert board.pending is None
        job_store.fail_on.clear()
        assert jobs.get_job(job['id'])['scheduled_date'] == datetime(2024, 3, 15, 13, 45)

    def test_pending_move_is_visible_during_update(self, jobs, make_job):
        job = make_job()

        class WatchingJobs:
            def update_job(self, job_id, data):
                assert board.pending.job_id == job_id
                assert board.get(job_id)['scheduled_date'] == datetime(2024, 3, 18, 15)
                return jobs.update_job(job_id, data)

        board = ScheduleBoard(WatchingJobs(), [job])
        board.move_job(job['id'], '2024-03-18', 15)
