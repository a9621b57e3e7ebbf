"""HTML emails sent when a procuration match is confirmed."""

from html import escape

from src.domain.value_objects.proxy_contact import ProxyContact


MAPROCURATION_URL = "https://www.maprocuration.gouv.fr"

_FOOTER = """
    <p style="margin-top: 30px; color: #6b7280; font-size: 14px;">
      Cet email a été envoyé automatiquement par {sender} dans le cadre du
      dispositif de mise en relation pour les procurations.
    </p>
"""


def build_person_block(person: ProxyContact, title: str) -> str:
    """Render a participant's contact details."""
    email = escape(person.email)
    return f"""
    <div style="background: #f0f9ff; padding: 15px; border-radius: 8px; margin: 15px 0; border-left: 4px solid #0369a1;">
      <h4 style="color: #0369a1; margin: 0 0 10px 0;">{escape(title)}</h4>
      <p style="margin: 5px 0;"><strong>Prénom :</strong> {escape(person.first_name)}</p>
      <p style="margin: 5px 0;"><strong>Nom :</strong> {escape(person.last_name)}</p>
      <p style="margin: 5px 0;"><strong>Numéro national d'électeur/électrice (NNE) :</strong> {escape(person.national_elector_number)}</p>
      <p style="margin: 5px 0;"><strong>Téléphone :</strong> {escape(person.phone)}</p>
      <p style="margin: 5px 0;"><strong>Email :</strong> <a href="mailto:{email}">{email}</a></p>
    </div>
    """  # noqa: E501


def build_email_to_requester(
    requester: ProxyContact,
    volunteer: ProxyContact,
    election_label: str,
    sender_name: str,
) -> tuple[str, str]:
    """Email telling the requester who will vote for them.

    Returns:
        (subject, html)
    """
    subject = "Procuration – Une personne a été trouvée pour voter à votre place"
    html = f"""
    <h2>Bonjour {escape(requester.first_name)},</h2>

    <p>Nous avons trouvé une personne qui accepte de voter à votre place pour {escape(election_label)}.</p>

    {build_person_block(volunteer, "Coordonnées de la personne qui votera pour vous (mandataire)")}

    <h3>Prochaine étape</h3>
    <p>Vous devez effectuer la démarche officielle sur le site du gouvernement :</p>
    <p><strong><a href="{MAPROCURATION_URL}">{MAPROCURATION_URL}</a></strong></p>
    <p>Vous y déclarerez cette personne comme mandataire en utilisant les informations ci-dessus (prénom, nom, NNE, téléphone, email).</p>

    <p><strong>Quand vous aurez terminé la procédure sur maprocuration.gouv.fr</strong>, merci de confirmer à la personne (par téléphone ou email) que la démarche est bien faite, afin qu'elle soit informée.</p>
    {_FOOTER.format(sender=escape(sender_name))}
    """  # noqa: E501
    return subject, html


def build_email_to_volunteer(
    requester: ProxyContact,
    volunteer: ProxyContact,
    election_label: str,
    sender_name: str,
) -> tuple[str, str]:
    """Email telling the volunteer whose mandate they will hold.

    Returns:
        (subject, html)
    """
    subject = "Procuration – Une personne vous a été assignée pour porter sa procuration"
    html = f"""
    <h2>Bonjour {escape(volunteer.first_name)},</h2>

    <p>Une personne souhaite vous donner sa procuration pour {escape(election_label)}. Voici ses coordonnées pour que vous puissiez échanger si besoin.</p>

    {build_person_block(requester, "Coordonnées de la personne qui vous donne sa procuration (mandant)")}

    <h3>Prochaine étape</h3>
    <p>Le mandant doit effectuer la démarche officielle sur le site du gouvernement :</p>
    <p><strong><a href="{MAPROCURATION_URL}">{MAPROCURATION_URL}</a></strong></p>
    <p>Il ou elle vous déclarera comme mandataire. <strong>Quand la procédure sera faite</strong>, le mandant vous contactera pour vous confirmer que tout est en ordre.</p>
    {_FOOTER.format(sender=escape(sender_name))}
    """  # noqa: E501
    return subject, html
