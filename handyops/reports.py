"""
Dashboard and report metrics

Every function reads a list of job records and returns derived figures; none
of them touch a store. A missing price counts as 0 in sums.
"""
from collections import OrderedDict

from handyops.errors import ValidationError
from handyops.jobs import COMPLETED, IN_PROGRESS, JOB_STATUSES, PAID, SCHEDULED
from handyops.utils.helpers import local_now

REPORT_WINDOWS = (3, 6, 12)
TODAYS_SCHEDULE_LIMIT = 3


def _price(job):
    return float(job.get('price') or 0)


def _same_month(value, now):
    return value is not None and value.year == now.year and value.month == now.month


def todays_jobs(jobs, now=None):
    """Jobs scheduled on the current calendar day, earliest first"""
    today = (now or local_now()).date()
    return sorted(
        (job for job in jobs if job['scheduled_date'].date() == today),
        key=lambda job: job['scheduled_date'],
    )


def pending_estimates(jobs):
    """Scheduled jobs that have no agreed price yet"""
    return [job for job in jobs if job.get('status') == SCHEDULED and job.get('price') is None]


def recent_payments(jobs, now=None):
    """Jobs paid during the current calendar month"""
    now = now or local_now()
    return [job for job in jobs if job.get('status') == PAID and _same_month(job.get('paid_at'), now)]


def monthly_earnings(jobs):
    """Sum of price over every paid job"""
    return sum(_price(job) for job in jobs if job.get('status') == PAID)


def dashboard_metrics(jobs, now=None):
    now = now or local_now()
    today = todays_jobs(jobs, now)
    return {
        'todays_jobs': len(today),
        'pending_estimates': len(pending_estimates(jobs)),
        'recent_payments': len(recent_payments(jobs, now)),
        'monthly_earnings': monthly_earnings(jobs),
        'todays_schedule': today[:TODAYS_SCHEDULE_LIMIT],
        'in_progress': len([job for job in jobs if job.get('status') == IN_PROGRESS]),
    }


def _month_keys(now, months):
    keys = []
    year, month = now.year, now.month
    for _ in range(months):
        keys.append((year, month))
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    return list(reversed(keys))


def revenue_by_month(jobs, months=6, now=None):
    """
    Paid revenue bucketed by ``paid_at`` month over a trailing window

    Args:
        jobs (list): Job records
        months (int): Window length, one of 3, 6 or 12, ending with the current month
        now (datetime): Reference time

    Returns:
        list: ``{"month": "YYYY-MM", "label": "Mon YYYY", "revenue": float, "jobs": int}``
        oldest first, empty months included
    """
    if months not in REPORT_WINDOWS:
        raise ValidationError(f'Months must be one of: {", ".join(str(m) for m in REPORT_WINDOWS)}')

    now = now or local_now()
    buckets = OrderedDict((key, {'revenue': 0.0, 'jobs': 0}) for key in _month_keys(now, months))
    for job in jobs:
        paid_at = job.get('paid_at')
        if job.get('status') != PAID or paid_at is None:
            continue
        bucket = buckets.get((paid_at.year, paid_at.month))
        if bucket is not None:
            bucket['revenue'] += _price(job)
            bucket['jobs'] += 1

    return [
        {
            'month': f'{year:04d}-{month:02d}',
            'label': now.replace(year=year, month=month, day=1).strftime('%b %Y'),
            'revenue': bucket['revenue'],
            'jobs': bucket['jobs'],
        }
        for (year, month), bucket in buckets.items()
    ]


def revenue_by_service(jobs):
    """Paid revenue per service type, largest first"""
    totals = {}
    for job in jobs:
        if job.get('status') == PAID:
            service = job.get('service_type') or 'Other'
            totals[service] = totals.get(service, 0.0) + _price(job)
    return [
        {'service_type': service, 'revenue': revenue}
        for service, revenue in sorted(totals.items(), key=lambda item: (-item[1], item[0]))
    ]


def status_distribution(jobs):
    counts = OrderedDict((status, 0) for status in JOB_STATUSES)
    for job in jobs:
        if job.get('status') in counts:
            counts[job['status']] += 1
    return counts


def average_job_value(jobs):
    """Mean price over jobs that have one; 0 when none do"""
    priced = [float(job['price']) for job in jobs if job.get('price') is not None]
    return sum(priced) / len(priced) if priced else 0.0


def report_summary(jobs, months=6, now=None):
    now = now or local_now()
    return {
        'months': months,
        'total_jobs': len(jobs),
        'completed_jobs': len([job for job in jobs if job.get('status') in (COMPLETED, PAID)]),
        'total_revenue': monthly_earnings(jobs),
        'average_job_value': average_job_value(jobs),
        'revenue_by_month': revenue_by_month(jobs, months, now),
        'revenue_by_service': revenue_by_service(jobs),
        'status_distribution': status_distribution(jobs),
    }
