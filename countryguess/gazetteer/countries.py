"""
Gazetteer - Canonical country codes and display names.

The gazetteer is the single source of truth for display names.
Codes follow ISO 3166-1 alpha-2 (plus XK for Kosovo, which the
map topology carries as its own feature).
"""

COUNTRY_ENTRIES: tuple[tuple[str, str], ...] = (
    # Africa
    ("DZ", "Algeria"),
    ("AO", "Angola"),
    ("BJ", "Benin"),
    ("BW", "Botswana"),
    ("BF", "Burkina Faso"),
    ("BI", "Burundi"),
    ("CV", "Cabo Verde"),
    ("CM", "Cameroon"),
    ("CF", "Central African Republic"),
    ("TD", "Chad"),
    ("KM", "Comoros"),
    ("CG", "Republic of the Congo"),
    ("CD", "Democratic Republic of the Congo"),
    ("CI", "Côte d'Ivoire"),
    ("DJ", "Djibouti"),
    ("EG", "Egypt"),
    ("GQ", "Equatorial Guinea"),
    ("ER", "Eritrea"),
    ("SZ", "Eswatini"),
    ("ET", "Ethiopia"),
    ("GA", "Gabon"),
    ("GM", "Gambia"),
    ("GH", "Ghana"),
    ("GN", "Guinea"),
    ("GW", "Guinea-Bissau"),
    ("KE", "Kenya"),
    ("LS", "Lesotho"),
    ("LR", "Liberia"),
    ("LY", "Libya"),
    ("MG", "Madagascar"),
    ("MW", "Malawi"),
    ("ML", "Mali"),
    ("MR", "Mauritania"),
    ("MU", "Mauritius"),
    ("MA", "Morocco"),
    ("MZ", "Mozambique"),
    ("NA", "Namibia"),
    ("NE", "Niger"),
    ("NG", "Nigeria"),
    ("RW", "Rwanda"),
    ("ST", "São Tomé and Príncipe"),
    ("SN", "Senegal"),
    ("SC", "Seychelles"),
    ("SL", "Sierra Leone"),
    ("SO", "Somalia"),
    ("ZA", "South Africa"),
    ("SS", "South Sudan"),
    ("SD", "Sudan"),
    ("TZ", "Tanzania"),
    ("TG", "Togo"),
    ("TN", "Tunisia"),
    ("UG", "Uganda"),
    ("EH", "Western Sahara"),
    ("ZM", "Zambia"),
    ("ZW", "Zimbabwe"),
    # Americas
    ("AG", "Antigua and Barbuda"),
    ("AR", "Argentina"),
    ("BS", "Bahamas"),
    ("BB", "Barbados"),
    ("BZ", "Belize"),
    ("BO", "Bolivia"),
    ("BR", "Brazil"),
    ("CA", "Canada"),
    ("CL", "Chile"),
    ("CO", "Colombia"),
    ("CR", "Costa Rica"),
    ("CU", "Cuba"),
    ("DM", "Dominica"),
    ("DO", "Dominican Republic"),
    ("EC", "Ecuador"),
    ("SV", "El Salvador"),
    ("FK", "Falkland Islands"),
    ("GF", "French Guiana"),
    ("GL", "Greenland"),
    ("GD", "Grenada"),
    ("GT", "Guatemala"),
    ("GY", "Guyana"),
    ("HT", "Haiti"),
    ("HN", "Honduras"),
    ("JM", "Jamaica"),
    ("MX", "Mexico"),
    ("NI", "Nicaragua"),
    ("PA", "Panama"),
    ("PY", "Paraguay"),
    ("PE", "Peru"),
    ("PR", "Puerto Rico"),
    ("KN", "Saint Kitts and Nevis"),
    ("LC", "Saint Lucia"),
    ("VC", "Saint Vincent and the Grenadines"),
    ("SR", "Suriname"),
    ("TT", "Trinidad and Tobago"),
    ("US", "United States of America"),
    ("UY", "Uruguay"),
    ("VE", "Venezuela"),
    # Asia
    ("AF", "Afghanistan"),
    ("AM", "Armenia"),
    ("AZ", "Azerbaijan"),
    ("BH", "Bahrain"),
    ("BD", "Bangladesh"),
    ("BT", "Bhutan"),
    ("BN", "Brunei"),
    ("KH", "Cambodia"),
    ("CN", "China"),
    ("CY", "Cyprus"),
    ("GE", "Georgia"),
    ("IN", "India"),
    ("ID", "Indonesia"),
    ("IR", "Iran"),
    ("IQ", "Iraq"),
    ("IL", "Israel"),
    ("JP", "Japan"),
    ("JO", "Jordan"),
    ("KZ", "Kazakhstan"),
    ("KW", "Kuwait"),
    ("KG", "Kyrgyzstan"),
    ("LA", "Laos"),
    ("LB", "Lebanon"),
    ("MY", "Malaysia"),
    ("MV", "Maldives"),
    ("MN", "Mongolia"),
    ("MM", "Myanmar"),
    ("NP", "Nepal"),
    ("KP", "North Korea"),
    ("OM", "Oman"),
    ("PK", "Pakistan"),
    ("PS", "Palestine"),
    ("PH", "Philippines"),
    ("QA", "Qatar"),
    ("SA", "Saudi Arabia"),
    ("SG", "Singapore"),
    ("KR", "South Korea"),
    ("LK", "Sri Lanka"),
    ("SY", "Syria"),
    ("TW", "Taiwan"),
    ("TJ", "Tajikistan"),
    ("TH", "Thailand"),
    ("TL", "Timor-Leste"),
    ("TR", "Turkey"),
    ("TM", "Turkmenistan"),
    ("AE", "United Arab Emirates"),
    ("UZ", "Uzbekistan"),
    ("VN", "Vietnam"),
    ("YE", "Yemen"),
    # Europe
    ("AL", "Albania"),
    ("AD", "Andorra"),
    ("AT", "Austria"),
    ("BY", "Belarus"),
    ("BE", "Belgium"),
    ("BA", "Bosnia and Herzegovina"),
    ("BG", "Bulgaria"),
    ("HR", "Croatia"),
    ("CZ", "Czechia"),
    ("DK", "Denmark"),
    ("EE", "Estonia"),
    ("FO", "Faroe Islands"),
    ("FI", "Finland"),
    ("FR", "France"),
    ("DE", "Germany"),
    ("GR", "Greece"),
    ("HU", "Hungary"),
    ("IS", "Iceland"),
    ("IE", "Ireland"),
    ("IT", "Italy"),
    ("XK", "Kosovo"),
    ("LV", "Latvia"),
    ("LI", "Liechtenstein"),
    ("LT", "Lithuania"),
    ("LU", "Luxembourg"),
    ("MT", "Malta"),
    ("MD", "Moldova"),
    ("MC", "Monaco"),
    ("ME", "Montenegro"),
    ("NL", "Netherlands"),
    ("MK", "North Macedonia"),
    ("NO", "Norway"),
    ("PL", "Poland"),
    ("PT", "Portugal"),
    ("RO", "Romania"),
    ("RU", "Russia"),
    ("SM", "San Marino"),
    ("RS", "Serbia"),
    ("SK", "Slovakia"),
    ("SI", "Slovenia"),
    ("ES", "Spain"),
    ("SE", "Sweden"),
    ("CH", "Switzerland"),
    ("UA", "Ukraine"),
    ("GB", "United Kingdom"),
    ("VA", "Vatican City"),
    # Oceania and polar
    ("AQ", "Antarctica"),
    ("AU", "Australia"),
    ("FJ", "Fiji"),
    ("KI", "Kiribati"),
    ("MH", "Marshall Islands"),
    ("FM", "Micronesia"),
    ("NR", "Nauru"),
    ("NC", "New Caledonia"),
    ("NZ", "New Zealand"),
    ("PW", "Palau"),
    ("PG", "Papua New Guinea"),
    ("WS", "Samoa"),
    ("SB", "Solomon Islands"),
    ("TO", "Tonga"),
    ("TV", "Tuvalu"),
    ("VU", "Vanuatu"),
)

COUNTRIES_BY_ISO: dict[str, str] = dict(COUNTRY_ENTRIES)


def country_codes() -> list[str]:
    """All canonical codes, in gazetteer order."""
    return [iso for iso, _ in COUNTRY_ENTRIES]


def display_name(iso_code: str) -> str | None:
    """Canonical display name for a code, or None if unknown."""
    return COUNTRIES_BY_ISO.get(iso_code)
