def responses_needed_to_view(
    responses_count: int,
    enrollments_count: int,
    is_admin: bool,
    min_responses_required: int,
) -> int:
    """
    Number of further responses required before results may be viewed.
    0 means viewable now. Admins can always view; so can anyone once every
    enrolled user (possibly zero, for anonymous or unknown enrollment) has
    responded.
    """
    if is_admin:
        return 0
    needed = min_responses_required - responses_count
    if responses_count >= enrollments_count:
        needed = 0
    return max(needed, 0)
