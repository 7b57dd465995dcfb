"""User folder discovery.

User folders are the per-user locations an operating system defines for
personal content (Desktop, Documents, Downloads, ...). On Windows they
are resolved through ``SHGetKnownFolderPath``; elsewhere from the home
directory and the XDG ``user-dirs.dirs`` file.

Only folders that exist as directories are returned. The result is a
set: nothing depends on the order the folders are looked up in.
"""

import logging
import os
import re
import sys
import uuid
from pathlib import Path

from junkctl.discovery.roots import DiscoveryError, to_slash

logger = logging.getLogger(__name__)

# KNOWNFOLDERID values of every shell, system, and per-user folder. Virtual
# folders without a filesystem location are skipped by HRESULT below.
KNOWN_FOLDER_IDS: dict[str, str] = {
    "NetworkFolder": "D20BEEC4-5CA8-4905-AE3B-BF251EA09B53",
    "ComputerFolder": "0AC0837C-BBF8-452A-850D-79D08E667CA7",
    "InternetFolder": "4D9F7874-4E0C-4904-967B-40B0D20C3E4B",
    "ControlPanelFolder": "82A74AEB-AEB4-465C-A014-D097EE346D63",
    "PrintersFolder": "76FC4E2D-D6AD-4519-A663-37BD56068185",
    "SyncManagerFolder": "43668BF8-C14E-49B2-97C9-747784D784B7",
    "SyncSetupFolder": "0F214138-B1D3-4A90-BBA9-27CBC0C5389A",
    "ConflictFolder": "4BFEFB45-347D-4006-A5BE-AC0CB0567192",
    "SyncResultsFolder": "289A9A43-BE44-4057-A41B-587A76D7E7F9",
    "RecycleBinFolder": "B7534046-3ECB-4C18-BE4E-64CD4CB7D6AC",
    "ConnectionsFolder": "6F0CD92B-2E97-45D1-88FF-B0D186B8DEDD",
    "Fonts": "FD228CB7-AE11-4AE3-864C-16F3910AB8FE",
    "Desktop": "B4BFCC3A-DB2C-424C-B029-7FE99A87C641",
    "Startup": "B97D20BB-F46A-4C97-BA10-5E3608430854",
    "Programs": "A77F5D77-2E2B-44C3-A6A2-ABA601054A51",
    "StartMenu": "625B53C3-AB48-4EC1-BA1F-A1EF4146FC19",
    "Recent": "AE50C081-EBD2-438A-8655-8A092E34987A",
    "SendTo": "8983036C-27C0-404B-8F08-102D10DCFD74",
    "Documents": "FDD39AD0-238F-46AF-ADB4-6C85480369C7",
    "Favorites": "1777F761-68AD-4D8A-87BD-30B759FA33DD",
    "NetHood": "C5ABBF53-E17F-4121-8900-86626FC2C973",
    "PrintHood": "9274BD8D-CFD1-41C3-B35E-B13F55A758F4",
    "Templates": "A63293E8-664E-48DB-A079-DF759E0509F7",
    "CommonStartup": "82A5EA35-D9CD-47C5-9629-E15D2F714E6E",
    "CommonPrograms": "0139D44E-6AFE-49F2-8690-3DAFCAE6FFB8",
    "CommonStartMenu": "A4115719-D62E-491D-AA7C-E74B8BE3B067",
    "PublicDesktop": "C4AA340D-F20F-4863-AFEF-F87EF2E6BA25",
    "ProgramData": "62AB5D82-FDC1-4DC3-A9DD-070D1D495D97",
    "CommonTemplates": "B94237E7-57AC-4347-9151-B08C6C32D1F7",
    "PublicDocuments": "ED4824AF-DCE4-45A8-81E2-FC7965083634",
    "RoamingAppData": "3EB685DB-65F9-4CF6-A03A-E3EF65729F3D",
    "LocalAppData": "F1B32785-6FBA-4FCF-9D55-7B8E7F157091",
    "LocalAppDataLow": "A520A1A4-1780-4FF6-BD18-167343C5AF16",
    "InternetCache": "352481E8-33BE-4251-BA85-6007CAEDCF9D",
    "Cookies": "2B0F765D-C0E9-4171-908E-08A611B84FF6",
    "History": "D9DC8A3B-B784-432E-A781-5A1130A75963",
    "System": "1AC14E77-02E7-4E5D-B744-2EB1AE5198B7",
    "SystemX86": "D65231B0-B2F1-4857-A4CE-A8E7C6EA7D27",
    "Windows": "F38BF404-1D43-42F2-9305-67DE0B28FC23",
    "Profile": "5E6C858F-0E22-4760-9AFE-EA3317B67173",
    "Pictures": "33E28130-4E1E-4676-835A-98395C3BC3BB",
    "ProgramFilesX86": "7C5A40EF-A0FB-4BFC-874A-C0F2E0B9FA8E",
    "ProgramFilesCommonX86": "DE974D24-D9C6-4D3E-BF91-F4455120B917",
    "ProgramFilesX64": "6D809377-6AF0-444B-8957-A3773F02200E",
    "ProgramFilesCommonX64": "6365D5A7-0F0D-45E5-87F6-0DA56B6A4F7D",
    "ProgramFiles": "905E63B6-C1BF-494E-B29C-65B732D3D21A",
    "ProgramFilesCommon": "F7F1ED05-9F6D-47A2-AAAE-29D317C6F066",
    "UserProgramFiles": "5CD7AEE2-2219-4A67-B85D-6C9CE15660CB",
    "UserProgramFilesCommon": "BCBD3057-CA5C-4622-B42D-BC56DB0AE516",
    "AdminTools": "724EF170-A42D-4FEF-9F26-B60E846FBA4F",
    "CommonAdminTools": "D0384E7D-BAC3-4797-8F14-CBA229B392B5",
    "Music": "4BD8D571-6D19-48D3-BE97-422220080E43",
    "Videos": "18989B1D-99B5-455B-841C-AB7C74E4DDFC",
    "Ringtones": "C870044B-F49E-4126-A9C3-B52A1FF411E8",
    "PublicPictures": "B6EBFB86-6907-413C-9AF7-4FC2ABF07CC5",
    "PublicMusic": "3214FAB5-9757-4298-BB61-92A9DEAA44FF",
    "PublicVideos": "2400183A-6185-49FB-A2D8-4A392A602BA3",
    "PublicRingtones": "E555AB60-153B-4D17-9F04-A5FE99FC15EC",
    "ResourceDir": "8AD10C31-2ADB-4296-A8F7-E4701232C972",
    "LocalizedResourcesDir": "2A00375E-224C-49DE-B8D1-440DF7EF3DDC",
    "CommonOEMLinks": "C1BAE2D0-10DF-4334-BEDD-7AA20B227A9D",
    "CDBurning": "9E52AB10-F80D-49DF-ACB8-4330F5687855",
    "UserProfiles": "0762D272-C50A-4BB0-A382-697DCD729B80",
    "Playlists": "DE92C1C7-837F-4F69-A3BB-86E631204A23",
    "SamplePlaylists": "15CA69B3-30EE-49C1-ACE1-6B5EC372AFB5",
    "SampleMusic": "B250C668-F57D-4EE1-A63C-290EE7D1AA1F",
    "SamplePictures": "C4900540-2379-4C75-844B-64E6FAF8716B",
    "SampleVideos": "859EAD94-2E85-48AD-A71A-0969CB56A6CD",
    "PhotoAlbums": "69D2CF90-FC33-4FB7-9A0C-EBB0F0FCB43C",
    "Public": "DFDF76A2-C82A-4D63-906A-5644AC457385",
    "ChangeRemovePrograms": "DF7266AC-9274-4867-8D55-3BD661DE872D",
    "AppUpdates": "A305CE99-F527-492B-8B1A-7E76FA98D6E4",
    "AddNewPrograms": "DE61D971-5EBC-4F02-A3A9-6C82895E5C04",
    "Downloads": "374DE290-123F-4565-9164-39C4925E467B",
    "PublicDownloads": "3D644C9B-1FB8-4F30-9B45-F670235F79C0",
    "SavedSearches": "7D1D3A04-DEBB-4115-95CF-2F29DA2920DA",
    "QuickLaunch": "52A4F021-7B75-48A9-9F6B-4B87A210BC8F",
    "Contacts": "56784854-C6CB-462B-8169-88E350ACB882",
    "SidebarParts": "A75D362E-50FC-4FB7-AC2C-A8BEAA314493",
    "SidebarDefaultParts": "7B396E54-9EC5-4300-BE0A-2482EBAE1A26",
    "PublicGameTasks": "DEBF2536-E1A8-4C59-B6A2-414586476AEA",
    "GameTasks": "054FAE61-4DD8-4787-80B6-090220C4B700",
    "SavedGames": "4C5C32FF-BB9D-43B0-B5B4-2D72E54EAAA4",
    "Games": "CAC52C1A-B53D-4EDC-92D7-6B2E8AC19434",
    "SEARCH_MAPI": "98EC0E18-2098-4D44-8644-66979315A281",
    "SEARCH_CSC": "EE32E446-31CA-4ABA-814F-A5EBD2FD6D5E",
    "Links": "BFB9D5E0-C6A9-404C-B2B2-AE6DB6AF4968",
    "UsersFiles": "F3CE0F7C-4901-4ACC-8648-D5D44B04EF8F",
    "UsersLibraries": "A302545D-DEFF-464B-ABE8-61C8648D939B",
    "SearchHome": "190337D1-B8CA-4121-A639-6D472D16972A",
    "OriginalImages": "2C36C0AA-5812-4B87-BFD0-4CD0DFB19B39",
    "DocumentsLibrary": "7B0DB17D-9CD2-4A93-9733-46CC89022E7C",
    "MusicLibrary": "2112AB0A-C86A-4FFE-A368-0DE96E47012E",
    "PicturesLibrary": "A990AE9F-A03B-4E80-94BC-9912D7504104",
    "VideosLibrary": "491E922F-5643-4AF4-A7EB-4E7A138D8174",
    "RecordedTVLibrary": "1A6FDBA2-F42D-4358-A798-B74D745926C5",
    "HomeGroup": "52528A6B-B9E3-4ADD-B60D-588C2DBA842D",
    "HomeGroupCurrentUser": "9B74B6A3-0DFD-4F11-9E78-5F7800F2E772",
    "DeviceMetadataStore": "5CE4A5E9-E4EB-479D-B89F-130C02886155",
    "Libraries": "1B3EA5DC-B587-4786-B4EF-BD1DC332AEAE",
    "PublicLibraries": "48DAF80B-E6CF-4F4E-B800-0E69D84EE384",
    "UserPinned": "9E3995AB-1F9C-4F13-B827-48B24B6C7174",
    "ImplicitAppShortcuts": "BCB5256F-79F6-4CEE-B725-DC34E402FD46",
    "AccountPictures": "008CA0B1-55B4-4C56-B8A8-4DE4B299D3BE",
    "PublicUserTiles": "0482AF6C-08F1-4C34-8C90-E17EC98B1E17",
    "AppsFolder": "1E87508D-89C2-42F0-8A7E-645A0F50CA58",
    "StartMenuAllPrograms": "F26305EF-6948-40B9-B255-81453D09C785",
    "CommonStartMenuPlaces": "A440879F-87A0-4F7D-B700-0207B966194A",
    "ApplicationShortcuts": "A3918781-E5F2-4890-B3D9-A7E54332328C",
    "RoamingTiles": "00BCFC5A-ED94-4E48-96A1-3F6217F21990",
    "RoamedTileImages": "AAA8D5A5-F1D6-4259-BAA8-78E7EF60835E",
    "Screenshots": "B7BEDE81-DF94-4682-A7D8-57A52620B86F",
    "CameraRoll": "AB5FB87B-7CE2-4F83-915D-550846C9537B",
    "SkyDrive": "A52BBA46-E9E1-435F-B3D9-28DAA648C0F6",
    "OneDrive": "A52BBA46-E9E1-435F-B3D9-28DAA648C0F6",
    "SkyDriveDocuments": "24D89E24-2F19-4534-9DDE-6A6671FBB8FE",
    "SkyDrivePictures": "339719B5-8C47-4894-94C2-D8F77ADD44A6",
    "SkyDriveMusic": "C3F2459E-80D6-45DC-BFEF-1F769F2BE730",
    "SkyDriveCameraRoll": "767E6811-49CB-4273-87C2-20F355E1085B",
    "SearchHistory": "0D4C3DB6-03A3-462F-A0E6-08924C41B5D4",
    "SearchTemplates": "7E636BFE-DFA9-4D5E-B456-D7B39851D8A9",
    "CameraRollLibrary": "2B20DF75-1EDA-4039-8097-38798227D5B7",
    "SavedPictures": "3B193882-D3AD-4EAB-965A-69829D1FB59F",
    "SavedPicturesLibrary": "E25B5812-BE88-4BD9-94B0-29233477B6C3",
    "RetailDemo": "12D4C69E-24AD-4923-BE19-31321C43A767",
    "Device": "1C2AC1DC-4358-4B6C-9733-AF21156576F0",
    "DevelopmentFiles": "DBE8E08E-3053-4BBC-B183-2A7B2B191E59",
    "Objects3D": "31C0DD25-9439-4F12-BF41-7FF4EDA38722",
    "AppCaptures": "EDC0FE71-98D8-4F4A-B920-C8DC133CB165",
    "LocalDocuments": "F42EE2D3-909F-4907-8871-4C22FC0BF756",
    "LocalPictures": "0DDD015D-B06C-45D5-8C4C-F59713854639",
    "LocalVideos": "35286A68-3C57-41A1-BBB1-0EAE73D76C95",
    "LocalMusic": "A0C69A99-21C8-4671-8703-7934162FCF1D",
    "LocalDownloads": "7D83EE9B-2244-4E70-B1F5-5393042AF1E4",
    "RecordedCalls": "2F8B40C2-83ED-48EE-B383-A1F157EC6F9A",
    "AllAppMods": "7AD67899-66AF-43BA-9156-6AAD42E6C596",
    "CurrentAppMods": "3DB40B20-2A30-4DBE-917E-771DD21DD099",
    "AppDataDesktop": "B2C5E279-7ADD-439F-B28C-C41FE1BBF672",
    "AppDataDocuments": "7BE16610-1F7F-44AC-BFF0-83E15F2FFCA1",
    "AppDataFavorites": "7CFBEFBC-DE1F-45AA-B843-A542AC536CC9",
    "AppDataProgramData": "559D40A3-A036-40FA-AF61-84CB430A4D34",
}

# HRESULTs meaning "this folder has no filesystem location here"
_SKIPPABLE_HRESULTS: frozenset[int] = frozenset(
    (
        0x80004005,  # E_FAIL: virtual folder
        0x80070002,  # ERROR_FILE_NOT_FOUND
        0x80070003,  # ERROR_PATH_NOT_FOUND
        0x80070057,  # E_INVALIDARG: folder not present on this system
    )
)

_POSIX_DEFAULT_FOLDERS: tuple[str, ...] = (
    "Desktop",
    "Documents",
    "Downloads",
    "Music",
    "Movies",
    "Pictures",
    "Public",
    "Templates",
    "Videos",
)

_USER_DIRS_LINE = re.compile(r'^\s*XDG_[A-Z_]+_DIR\s*=\s*"(?P<path>[^"]*)"\s*$')


def discover_user_dirs() -> set[str]:
    """Resolve the current user's folders.

    Returns:
        Existing user folders as absolute, trailing-slash-terminated paths.

    Raises:
        DiscoveryError: If a known folder lookup fails unexpectedly.
    """
    candidates = _windows_user_dirs() if sys.platform == "win32" else _posix_user_dirs()

    user_dirs: set[str] = set()
    for candidate in candidates:
        if not candidate.is_dir():
            continue
        path = to_slash(str(candidate)).rstrip("/") + "/"
        user_dirs.add(path)

    logger.debug("Discovered %d user folders", len(user_dirs))
    return user_dirs


def _windows_user_dirs() -> list[Path]:
    """Resolve every entry of KNOWN_FOLDER_IDS through the shell."""
    paths: list[Path] = []
    for name, folder_id in KNOWN_FOLDER_IDS.items():
        hresult, path = _query_known_folder(folder_id)
        if hresult == 0 and path:
            paths.append(Path(path))
            continue
        if hresult in _SKIPPABLE_HRESULTS:
            logger.debug("Known folder %s has no location (0x%08X)", name, hresult)
            continue
        msg = f"Cannot resolve known folder {name}: HRESULT 0x{hresult:08X}"
        raise DiscoveryError(msg)
    return paths


def _query_known_folder(folder_id: str) -> tuple[int, str | None]:
    """Call SHGetKnownFolderPath for one KNOWNFOLDERID.

    Args:
        folder_id: GUID string of the known folder.

    Returns:
        Tuple of (unsigned HRESULT, path or None).
    """
    import ctypes
    from ctypes import wintypes

    class _GUID(ctypes.Structure):
        _fields_ = [
            ("Data1", wintypes.DWORD),
            ("Data2", wintypes.WORD),
            ("Data3", wintypes.WORD),
            ("Data4", ctypes.c_ubyte * 8),
        ]

    guid = _GUID.from_buffer_copy(uuid.UUID(folder_id).bytes_le)
    shell32 = ctypes.windll.shell32  # type: ignore[attr-defined]
    ole32 = ctypes.windll.ole32  # type: ignore[attr-defined]
    shell32.SHGetKnownFolderPath.argtypes = [
        ctypes.POINTER(_GUID),
        wintypes.DWORD,
        wintypes.HANDLE,
        ctypes.POINTER(ctypes.c_wchar_p),
    ]
    shell32.SHGetKnownFolderPath.restype = ctypes.c_long

    out = ctypes.c_wchar_p()
    hresult = shell32.SHGetKnownFolderPath(ctypes.byref(guid), 0, None, ctypes.byref(out))
    try:
        return hresult & 0xFFFFFFFF, out.value
    finally:
        ole32.CoTaskMemFree(out)


def _posix_user_dirs() -> list[Path]:
    """Collect the home folder, conventional folders, and XDG user dirs."""
    home = Path.home()
    paths = [home, *(home / name for name in _POSIX_DEFAULT_FOLDERS)]
    paths.extend(_read_xdg_user_dirs(home))
    return paths


def _read_xdg_user_dirs(home: Path) -> list[Path]:
    """Parse ``user-dirs.dirs`` from the XDG config home.

    Args:
        home: Home directory used to expand ``$HOME``.

    Returns:
        Paths listed in the file; empty if the file is missing or unreadable.
    """
    config_home = os.environ.get("XDG_CONFIG_HOME") or str(home / ".config")
    user_dirs_file = Path(config_home) / "user-dirs.dirs"

    try:
        lines = user_dirs_file.read_text(encoding="utf-8").splitlines()
    except FileNotFoundError:
        return []
    except OSError as e:
        logger.warning("Failed to read %s: %s", user_dirs_file, e)
        return []

    paths: list[Path] = []
    for line in lines:
        match = _USER_DIRS_LINE.match(line)
        if match is None:
            continue
        raw = match.group("path").replace("$HOME", str(home))
        if raw:
            paths.append(Path(raw))
    return paths
