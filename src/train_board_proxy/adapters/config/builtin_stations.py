"""Minimal station list used when no station directory file is available."""

from train_board_proxy.domain.models.station import ProviderType, Station

_RFI_MONITOR = (
    "https://iechub.rfi.it/ArriviPartenze/en/ArrivalsDepartures/Monitor?Arrivals=False&PlaceId={}"
)
_NS_SCREEN = (
    "https://www.ns.nl/reisinformatie/externe-schermen/treinen/vertrektijden?stationId={}&columns=1"
)
_DB_BOARD = (
    "https://reiseauskunft.bahn.de/bin/bhftafel.exe/dn?input={}&boardType=dep&time=actual&start=yes"
)
_SBB_FEED = "https://transport.opendata.ch/v1/stationboard?station={}&limit=20"
_NR_BOARD = "https://ojp.nationalrail.co.uk/service/ldbboard/dep/{}"
_SNCF_BOARD = "https://www.garesetconnexions.sncf/fr/gare/{}/{}/departs"


def _it(code: str, name: str, city: str, slug: str) -> Station:
    return Station("IT", code, name, city, slug, _RFI_MONITOR.format(code), ProviderType.RFI)


def _nl(code: str, name: str, city: str, slug: str) -> Station:
    return Station("NL", code, name, city, slug, _NS_SCREEN.format(code), ProviderType.NS)


def _de(code: str, name: str, city: str, slug: str) -> Station:
    return Station("DE", code, name, city, slug, _DB_BOARD.format(code), ProviderType.DB)


def _ch(code: str, city: str, slug: str) -> Station:
    return Station("CH", code, code, city, slug, _SBB_FEED.format(code), ProviderType.SBB)


def _uk(code: str, name: str, city: str, slug: str) -> Station:
    return Station(
        "UK", code, name, city, slug, _NR_BOARD.format(code), ProviderType.NATIONAL_RAIL
    )


def _fr(code: str, name: str, city: str, slug: str) -> Station:
    return Station(
        "FR", code, name, city, slug, _SNCF_BOARD.format(code, slug), ProviderType.SNCF
    )


BUILTIN_STATIONS: tuple[Station, ...] = (
    _it("1728", "Milano Centrale", "Milan", "milano-centrale"),
    _it("1802", "Roma Termini", "Rome", "roma-termini"),
    _nl("ASD", "Amsterdam Centraal", "Amsterdam", "amsterdam-centraal"),
    _nl("RTD", "Rotterdam Centraal", "Rotterdam", "rotterdam-centraal"),
    _nl("UT", "Utrecht Centraal", "Utrecht", "utrecht-centraal"),
    _de("Berlin Hbf", "Berlin Hauptbahnhof", "Berlin", "berlin-hauptbahnhof"),
    _de("München Hbf", "München Hauptbahnhof", "Munich", "munchen-hauptbahnhof"),
    _de("Frankfurt(Main)Hbf", "Frankfurt Hauptbahnhof", "Frankfurt", "frankfurt-hauptbahnhof"),
    _de("Hamburg Hbf", "Hamburg Hauptbahnhof", "Hamburg", "hamburg-hauptbahnhof"),
    _de("Köln Hbf", "Köln Hauptbahnhof", "Cologne", "koln-hauptbahnhof"),
    _ch("Zürich HB", "Zurich", "zurich-hb"),
    _ch("Genève", "Geneva", "geneve"),
    _uk("EUS", "London Euston", "London", "london-euston"),
    _uk("VIC", "London Victoria", "London", "london-victoria"),
    _uk("KGX", "London Kings Cross", "London", "london-kings-cross"),
    _uk("MAN", "Manchester Piccadilly", "Manchester", "manchester-piccadilly"),
    _uk("BHM", "Birmingham New Street", "Birmingham", "birmingham-new-street"),
    _fr("frpst", "Paris Gare du Nord", "Paris", "paris-gare-du-nord"),
    _fr("frply", "Paris Gare de Lyon", "Paris", "paris-gare-de-lyon"),
    _fr("frlpd", "Lyon Part-Dieu", "Lyon", "lyon-part-dieu"),
)
