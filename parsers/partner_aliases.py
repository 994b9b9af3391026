"""
Field alias table for .partner files.

Maps every canonical form field key to the spellings accepted in a file
(English, French, abbreviations). Lookups go through normalize_key, so the
aliases below only need to be listed once in lowercase snake form.

Usage:
    table = get_alias_table()
    table.resolve("Code Postal")   # "postal_code"
    table.resolve("prénom")        # "auth.name"
    table.resolve("partner_rib")   # None (unknown, caller decides)
"""

from functools import lru_cache
from types import MappingProxyType
from typing import Mapping, Optional

import structlog

from utils.text_utils import normalize_key

logger = structlog.get_logger(__name__)


# =============================================================================
# ALIASES
# =============================================================================
# Each canonical key lists itself first.

FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    # ── Identity ──────────────────────────────────────────────────────────────
    "name": ("name", "partner_name", "company_name", "raison_sociale",
             "nom_entreprise", "société", "societe", "nom"),
    "code": ("code", "partner_code", "code_client", "code_partenaire",
             "numero_client"),
    "partner_type": ("partner_type", "type", "type_partenaire"),
    "channel": ("channel", "canal", "distribution_channel"),
    "status": ("status", "statut", "etat"),

    # ── Contact ───────────────────────────────────────────────────────────────
    "phone": ("phone", "tel", "telephone", "téléphone", "mobile",
              "gsm", "portable", "fixe"),
    "email": ("email", "e_mail", "courriel", "mail"),
    "whatsapp": ("whatsapp", "wa", "ws"),
    "website": ("website", "site_web", "url", "site"),

    # ── Address ───────────────────────────────────────────────────────────────
    "address_line1": ("address_line1", "address", "adresse", "adresse1",
                      "adresse_ligne1", "rue", "street"),
    "address_line2": ("address_line2", "adresse2", "adresse_ligne2",
                      "complement_adresse"),
    "city": ("city", "ville", "cité", "cite"),
    "region": ("region", "région", "province"),
    "country": ("country", "pays", "country_code", "code_pays"),
    "postal_code": ("postal_code", "code_postal", "zip", "cp"),
    "geo_area_code": ("geo_area_code", "zone_geo", "geo_area", "zone"),
    "geo_lat": ("geo_lat", "latitude", "lat"),
    "geo_lng": ("geo_lng", "longitude", "lng", "lon"),

    # ── Commercial ────────────────────────────────────────────────────────────
    "price_list_id": ("price_list_id", "price_list", "liste_prix",
                      "tarif", "liste_tarif"),
    "payment_term_id": ("payment_term_id", "payment_term", "condition_paiement",
                        "modalite_paiement", "delai_paiement"),
    "credit_limit": ("credit_limit", "limite_credit", "plafond_credit",
                     "encours", "credit"),
    "default_discount_rate": ("default_discount_rate", "discount", "discount_rate",
                              "remise", "taux_remise", "remise_defaut"),
    "default_discount_amount": ("default_discount_amount", "remise_fixe",
                                "discount_amount", "montant_remise"),
    "max_discount_rate": ("max_discount_rate", "remise_max", "remise_maximum"),
    "currency": ("currency", "devise", "monnaie"),
    "risk_score": ("risk_score", "score_risque", "risque"),
    "salesperson_id": ("salesperson_id", "commercial_id", "vendeur_id"),
    "parent_partner_id": ("parent_partner_id", "parent_id", "groupe_id"),

    # ── Tax ───────────────────────────────────────────────────────────────────
    "tax_number_ice": ("tax_number_ice", "ice", "identifiant_commun"),
    "tax_number_if": ("tax_number_if", "if", "identifiant_fiscal"),
    "tax_exempt": ("tax_exempt", "exonere_tva", "exonere", "exonération"),
    "vat_group_code": ("vat_group_code", "groupe_tva", "code_tva"),

    # ── Delivery ──────────────────────────────────────────────────────────────
    "delivery_instructions": ("delivery_instructions", "instructions_livraison",
                              "notes_livraison", "consignes"),
    "delivery_zone": ("delivery_zone", "zone_livraison", "secteur_livraison"),
    "min_order_amount": ("min_order_amount", "montant_minimum", "commande_min",
                         "min_commande"),
    "opening_hours": ("opening_hours", "horaires", "heures_ouverture"),

    # ── Options ───────────────────────────────────────────────────────────────
    "allow_show_on_pos": ("allow_show_on_pos", "visible_pos", "afficher_pos"),
    "blocked_until": ("blocked_until", "bloquer_jusqu", "date_deblocage"),
    "block_reason": ("block_reason", "motif_blocage", "raison_blocage"),

    # ── Auth (user account) ───────────────────────────────────────────────────
    "auth.name": ("auth.name", "auth_name", "firstname", "prenom", "prénom"),
    "auth.last_name": ("auth.last_name", "auth_last_name", "lastname",
                       "nom_famille", "nom_utilisateur"),
    "auth.email": ("auth.email", "auth_email", "login_email", "email_compte"),
    "auth.phone": ("auth.phone", "auth_phone", "phone_compte"),
    "auth.password": ("auth.password", "auth_password", "mot_de_passe",
                      "password", "mdp"),
    "auth.gender": ("auth.gender", "auth_gender", "genre", "sexe"),
    "auth.branch_code": ("auth.branch_code", "auth_branch", "agence",
                         "branch", "code_agence"),
    "auth.geo_area_code": ("auth.geo_area_code", "auth_geo", "zone_compte"),
    "auth.target_app": ("auth.target_app", "target_app", "application"),
    "auth.is_active": ("auth.is_active", "is_active", "actif", "active"),
}


class FieldAliasTable:
    """
    Immutable alias lookup.

    The reverse index (normalized alias → canonical key) is built once in
    __init__. If two canonical keys claim the same normalized alias, the one
    listed last wins.
    """

    def __init__(self, aliases: Mapping[str, tuple[str, ...]] = FIELD_ALIASES):
        self._aliases = MappingProxyType({k: tuple(v) for k, v in aliases.items()})
        self._known = frozenset(self._aliases)

        index: dict[str, str] = {}
        for canonical, spellings in self._aliases.items():
            for alias in spellings:
                normalized = normalize_key(alias)
                previous = index.get(normalized)
                if previous is not None and previous != canonical:
                    logger.debug(
                        "alias_collision",
                        alias=normalized,
                        kept=canonical,
                        replaced=previous,
                    )
                index[normalized] = canonical
        self._index = MappingProxyType(index)

    def __len__(self) -> int:
        return len(self._known)

    def __contains__(self, canonical_key: object) -> bool:
        return canonical_key in self._known

    @property
    def known_keys(self) -> frozenset[str]:
        """Closed set of canonical partner and auth keys."""
        return self._known

    def aliases_for(self, canonical_key: str) -> tuple[str, ...]:
        """Declared spellings of a canonical key (empty if unknown)."""
        return self._aliases.get(canonical_key, ())

    def is_known(self, canonical_key: str) -> bool:
        return canonical_key in self._known

    def resolve(self, key: str) -> Optional[str]:
        """
        Resolve any spelling to its canonical key.

        Returns None for keys that match no alias; never raises.
        """
        return self._index.get(normalize_key(key))


@lru_cache()
def get_alias_table() -> FieldAliasTable:
    """
    Get the shared alias table built from FIELD_ALIASES.

    Built on first use and read-only afterwards, so it can be shared by
    concurrent callers.
    """
    return FieldAliasTable()
