"""String sanitizers shared by the request schemas."""

_HTML_ENTITIES = {
	"&": "&amp;",
	'"': "&quot;",
	"'": "&#x27;",
	"<": "&lt;",
	">": "&gt;",
	"/": "&#x2F;",
	"\\": "&#x5C;",
	"`": "&#96;",
}

_GMAIL_DOMAINS = ("gmail.com", "googlemail.com")

_ICLOUD_DOMAINS = ("icloud.com", "me.com")

_OUTLOOK_DOMAINS = (
	"hotmail.at", "hotmail.be", "hotmail.ca", "hotmail.cl", "hotmail.co.il",
	"hotmail.co.nz", "hotmail.co.th", "hotmail.co.uk", "hotmail.com",
	"hotmail.com.ar", "hotmail.com.au", "hotmail.com.br", "hotmail.com.gr",
	"hotmail.com.mx", "hotmail.com.pe", "hotmail.com.tr", "hotmail.com.vn",
	"hotmail.cz", "hotmail.de", "hotmail.dk", "hotmail.es", "hotmail.fr",
	"hotmail.hu", "hotmail.id", "hotmail.ie", "hotmail.in", "hotmail.it",
	"hotmail.jp", "hotmail.kr", "hotmail.lv", "hotmail.my", "hotmail.ph",
	"hotmail.pt", "hotmail.sa", "hotmail.sg", "hotmail.sk",
	"live.be", "live.co.uk", "live.com", "live.com.ar", "live.com.mx",
	"live.de", "live.es", "live.eu", "live.fr", "live.it", "live.nl",
	"msn.com",
	"outlook.at", "outlook.be", "outlook.cl", "outlook.co.il", "outlook.co.nz",
	"outlook.co.th", "outlook.com", "outlook.com.ar", "outlook.com.au",
	"outlook.com.br", "outlook.com.gr", "outlook.com.pe", "outlook.com.tr",
	"outlook.com.vn", "outlook.cz", "outlook.de", "outlook.dk", "outlook.es",
	"outlook.fr", "outlook.hu", "outlook.id", "outlook.ie", "outlook.in",
	"outlook.it", "outlook.jp", "outlook.kr", "outlook.lv", "outlook.my",
	"outlook.ph", "outlook.pt", "outlook.sa", "outlook.sg", "outlook.sk",
	"passport.com",
)

_YAHOO_DOMAINS = (
	"rocketmail.com", "yahoo.ca", "yahoo.co.uk", "yahoo.com", "yahoo.de",
	"yahoo.fr", "yahoo.in", "yahoo.it", "ymail.com",
)

_YANDEX_DOMAINS = ("yandex.ru", "yandex.ua", "yandex.kz", "yandex.com", "yandex.by", "ya.ru")


def escape_html(value: str) -> str:
	"""Replace characters with HTML meaning by their entities.

	``&`` is handled in the same pass as the others, so existing entities are
	escaped again rather than preserved.
	"""
	return "".join(_HTML_ENTITIES.get(ch, ch) for ch in value)


def normalize_email(email: str) -> str:
	"""Canonical form of an already syntax-checked address.

	Everything is lowercased, then the large providers' sub-addressing is
	folded away so aliases of one mailbox compare equal:

	- Gmail drops dots and any ``+tag``; ``googlemail.com`` becomes ``gmail.com``.
	- Outlook/Hotmail/Live and iCloud drop any ``+tag``.
	- Yahoo drops any ``-tag``.
	- Yandex domains become ``yandex.ru``.
	"""
	local, _, domain = email.strip().lower().rpartition("@")
	if domain in _GMAIL_DOMAINS:
		local = local.split("+", 1)[0].replace(".", "")
		domain = "gmail.com"
	elif domain in _OUTLOOK_DOMAINS or domain in _ICLOUD_DOMAINS:
		local = local.split("+", 1)[0]
	elif domain in _YAHOO_DOMAINS:
		local = local.split("-", 1)[0]
	elif domain in _YANDEX_DOMAINS:
		domain = "yandex.ru"
	return f"{local}@{domain}"
