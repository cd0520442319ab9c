"""
Tests for the renderer / sender / template source contracts.
"""

from herald import (
    Address,
    Email,
    EmailSender,
    PackageTemplateSource,
    PreconditionViolationError,
    Renderer,
    SendResponse,
    TemplateSource,
)


class InMemorySender:
    """Sender double that renders the body and records it instead of sending."""

    def __init__(self, renderer):
        self.renderer = renderer
        self.outbox = []

    async def send(self, email, cancellation=None):
        try:
            body = await email.render_body(self.renderer, cancellation)
        except PreconditionViolationError as e:
            return SendResponse.fail(str(e))
        self.outbox.append((email.to_addresses, email.subject, body))
        return SendResponse.success()


class TestProtocolConformance:
    """Test structural conformance checks."""

    def test_renderer(self, echo_renderer):
        assert isinstance(echo_renderer, Renderer)

    def test_sender(self, echo_renderer):
        assert isinstance(InMemorySender(echo_renderer), EmailSender)

    def test_template_source(self):
        assert isinstance(PackageTemplateSource('herald'), TemplateSource)

    def test_non_conforming_object(self):
        assert not isinstance(object(), Renderer)


class TestSendFlow:
    """Test a delivery collaborator driving the two-phase render."""

    def test_send_rendered_template(self, substituting_renderer, run):
        sender = InMemorySender(substituting_renderer)
        email = (
            Email(Address('me@example.com'))
            .with_to(Address('you@example.com'))
            .with_subject('Greetings')
            .using_string_template('hello {{who}}', {'who': 'world'})
        )

        response = run(sender.send(email))

        assert response.is_successful is True
        assert sender.outbox == [((Address('you@example.com'),), 'Greetings', 'hello world')]

    def test_send_without_body_reports_failure(self, echo_renderer, run):
        sender = InMemorySender(echo_renderer)

        response = run(sender.send(Email(Address('me@example.com'))))

        assert response.is_successful is False
        assert response.errors == ('body or template must be set',)
        assert sender.outbox == []
