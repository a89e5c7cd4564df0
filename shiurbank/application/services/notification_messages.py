"""Subject and body text of the e-mails sent through notification topics."""

from shiurbank.application.dtos.series import SeriesDetail


def series_verification_notice(series: SeriesDetail, creator_username: str) -> tuple[str, str]:
    """Admin notice for a new series that needs verification."""
    subject = f"New Series Requires Verification - Series #{series.series_id}"
    message = (
        "A new series has been created and requires verification:\n"
        "\n"
        f"Series ID: {series.series_id}\n"
        f"Description: {series.description or ''}\n"
        f"Rabbi: {series.rebbi_name}\n"
        f"Topic: {series.topic_name}\n"
        f"Institution: {series.institution_name}\n"
        f"Created by: {creator_username}\n"
        "\n"
        "Please review this series in the admin panel.\n"
    )
    return subject, message


def new_recording_notice(
    series: SeriesDetail, title: str, recorded_at: str, description: str | None
) -> tuple[str, str]:
    """Subscriber notice for a newly uploaded recording."""
    subject = f"New shiur: {title}"
    lines = [
        f"A new shiur has been uploaded to {series.display_name}.",
        "",
        f"Title: {title}",
        f"Recorded: {recorded_at}",
    ]
    if description:
        lines.append(f"Description: {description}")
    lines += ["", "Log in to ShiurBank to listen."]
    return subject, "\n".join(lines) + "\n"
