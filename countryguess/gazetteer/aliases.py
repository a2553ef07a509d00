"""
Alias table - colloquial, historical and official-name variants.

Keys are written as people type them; they are normalized once when
the lookup table is built, so punctuation and case variants of the
same alias collapse onto a single entry.
"""

ALIASES: dict[str, str] = {
    # United States
    "USA": "US",
    "U.S.A.": "US",
    "US": "US",
    "U.S.": "US",
    "United States": "US",
    "America": "US",
    "The United States": "US",
    "The States": "US",
    # United Kingdom
    "UK": "GB",
    "U.K.": "GB",
    "Great Britain": "GB",
    "Britain": "GB",
    "England": "GB",
    "Scotland": "GB",
    "Wales": "GB",
    "Northern Ireland": "GB",
    "United Kingdom of Great Britain and Northern Ireland": "GB",
    # Middle East
    "UAE": "AE",
    "U.A.E.": "AE",
    "Emirates": "AE",
    "Iran (Islamic Republic of)": "IR",
    "Islamic Republic of Iran": "IR",
    "Persia": "IR",
    "Syrian Arab Republic": "SY",
    "State of Palestine": "PS",
    "Palestinian Territories": "PS",
    "Türkiye": "TR",
    "Turkiye": "TR",
    "Republic of Turkey": "TR",
    "Kingdom of Saudi Arabia": "SA",
    "KSA": "SA",
    # East Asia
    "Korea (South)": "KR",
    "Korea (Republic of)": "KR",
    "Republic of Korea": "KR",
    "ROK": "KR",
    "Korea (North)": "KP",
    "DPRK": "KP",
    "Democratic People's Republic of Korea": "KP",
    "People's Republic of China": "CN",
    "PRC": "CN",
    "Republic of China": "TW",
    "Chinese Taipei": "TW",
    "Formosa": "TW",
    "Nippon": "JP",
    "Outer Mongolia": "MN",
    # South-east Asia
    "Viet Nam": "VN",
    "Lao People's Democratic Republic": "LA",
    "Lao PDR": "LA",
    "Brunei Darussalam": "BN",
    "East Timor": "TL",
    "Timor Leste": "TL",
    "Burma": "MM",
    "Kampuchea": "KH",
    "Siam": "TH",
    "Ceylon": "LK",
    "Malaya": "MY",
    # Europe
    "Russian Federation": "RU",
    "Czech Republic": "CZ",
    "Czech": "CZ",
    "Bohemia": "CZ",
    "Macedonia": "MK",
    "FYROM": "MK",
    "Former Yugoslav Republic of Macedonia": "MK",
    "Holy See": "VA",
    "Vatican": "VA",
    "The Netherlands": "NL",
    "Holland": "NL",
    "Republic of Ireland": "IE",
    "Eire": "IE",
    "Moldova (Republic of)": "MD",
    "Republic of Moldova": "MD",
    "Bosnia": "BA",
    "Bosnia-Herzegovina": "BA",
    "Byelorussia": "BY",
    "Belorussia": "BY",
    "Swiss Confederation": "CH",
    "Deutschland": "DE",
    "Espana": "ES",
    "España": "ES",
    "Hellas": "GR",
    "Faroes": "FO",
    "Slovak Republic": "SK",
    # Africa
    "Ivory Coast": "CI",
    "Cote d'Ivoire": "CI",
    "Cote d Ivoire": "CI",
    "Côte d Ivoire": "CI",
    "Tanzania (United Republic of)": "TZ",
    "United Republic of Tanzania": "TZ",
    "DRC": "CD",
    "DR Congo": "CD",
    "D.R. Congo": "CD",
    "Congo-Kinshasa": "CD",
    "Congo (Kinshasa)": "CD",
    "Zaire": "CD",
    "Congo-Brazzaville": "CG",
    "Congo (Brazzaville)": "CG",
    "Congo Republic": "CG",
    "Swaziland": "SZ",
    "Cape Verde": "CV",
    "The Gambia": "GM",
    "Sao Tome and Principe": "ST",
    "São Tomé": "ST",
    "Sao Tome": "ST",
    "Upper Volta": "BF",
    "Dahomey": "BJ",
    "Rhodesia": "ZW",
    "Abyssinia": "ET",
    "Nyasaland": "MW",
    "Bechuanaland": "BW",
    "Basutoland": "LS",
    "South West Africa": "NA",
    "Libyan Arab Jamahiriya": "LY",
    "CAR": "CF",
    "RSA": "ZA",
    "Sahrawi Republic": "EH",
    # Americas
    "Bolivia (Plurinational State of)": "BO",
    "Plurinational State of Bolivia": "BO",
    "Venezuela (Bolivarian Republic of)": "VE",
    "Bolivarian Republic of Venezuela": "VE",
    "The Bahamas": "BS",
    "British Honduras": "BZ",
    "Dutch Guiana": "SR",
    "Surinam": "SR",
    "British Guiana": "GY",
    "Trinidad": "TT",
    "St Lucia": "LC",
    "St. Lucia": "LC",
    "St Kitts and Nevis": "KN",
    "St. Kitts and Nevis": "KN",
    "Saint Kitts": "KN",
    "St Vincent and the Grenadines": "VC",
    "St. Vincent and the Grenadines": "VC",
    "Saint Vincent": "VC",
    "Antigua": "AG",
    "Malvinas": "FK",
    "Falklands": "FK",
    "Islas Malvinas": "FK",
    "Mexico (United Mexican States)": "MX",
    "México": "MX",
    # Oceania
    "Federated States of Micronesia": "FM",
    "Micronesia (Federated States of)": "FM",
    "Western Samoa": "WS",
    "PNG": "PG",
    "Aotearoa": "NZ",
    "New Hebrides": "VU",
    "Gilbert Islands": "KI",
    "Ellice Islands": "TV",
    "Kosova": "XK",
}
