"""Delegate classes shared by the matcher tests."""


class Mailman:
    """Delegate with a couple of real methods to observe restoration."""

    def deliver_mail(self, *args, **kwargs):
        return "delivered"

    def deliver_mail_and_avoid_dogs(self):
        return "delivered without incident"


class Company:
    def name(self):
        return "Acme Company"
