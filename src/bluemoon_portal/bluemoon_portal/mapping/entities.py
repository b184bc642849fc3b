from __future__ import annotations

from ..core.enums import FeeType
from .fields import EntityMapping, FieldKind, FieldSpec

TEXT = FieldKind.TEXT
FLAG = FieldKind.FLAG
INTEGER = FieldKind.INTEGER
NUMBER = FieldKind.NUMBER
REFERENCE = FieldKind.REFERENCE
DATE = FieldKind.DATE
LABEL = FieldKind.LABEL

_ID = FieldSpec("id", "id", REFERENCE)


HOUSEHOLD = EntityMapping(
    "household",
    (
        _ID,
        FieldSpec("chuHo", "ownerName"),
        FieldSpec("soThanhVien", "numMembers", INTEGER, default=1),
        FieldSpec("soDienThoai", "phoneNumber"),
        FieldSpec("hoatDong", "active", FLAG),
        FieldSpec("soHoKhau", "soHoKhau"),
        FieldSpec("soNha", "soNha"),
        FieldSpec("duong", "duong"),
        FieldSpec("phuong", "phuong"),
        FieldSpec("quan", "quan"),
        FieldSpec("ngayLamHoKhau", "ngayLamHoKhau", DATE),
        FieldSpec("address", "address", aliases=("diaChi",)),
        FieldSpec("email", "email"),
    ),
)

PERSON = EntityMapping(
    "person",
    (
        _ID,
        FieldSpec("hoTen", "fullName"),
        FieldSpec("biDanh", "nickname"),
        FieldSpec("ngaySinh", "dateOfBirth", DATE),
        FieldSpec("gioiTinh", "gender"),
        FieldSpec("noiSinh", "placeOfBirth"),
        FieldSpec("nguyenQuan", "placeOfOrigin"),
        FieldSpec("diaChiHienNay", "currentAddress"),
        # the server stores the ID card number as cccd
        FieldSpec("soCMT", "idCardNumber", aliases=("cccd",), mirrors=("cccd",)),
        FieldSpec("ngayCap", "idCardIssueDate", DATE),
        FieldSpec("noiCap", "idCardIssuePlace"),
        FieldSpec("danToc", "ethnicity"),
        FieldSpec("tonGiao", "religion"),
        FieldSpec("quocTich", "nationality"),
        FieldSpec("ngheNghiep", "occupation"),
        FieldSpec("noiLamViec", "workPlace"),
        FieldSpec("trangThai", "status"),
        FieldSpec("ghiChu", "notes"),
        FieldSpec("quanHeVoiChuHo", "relationshipWithOwner"),
        FieldSpec("hoKhauId", "householdId", REFERENCE, aliases=("hoKhau",)),
    ),
)

FEE = EntityMapping(
    "fee",
    (
        _ID,
        FieldSpec("tenKhoanThu", "name"),
        FieldSpec("batBuoc", "type", LABEL, labels=(FeeType.MANDATORY.value, FeeType.VOLUNTARY.value)),
        FieldSpec("soTien", "amount", NUMBER),
        FieldSpec("thoiHan", "dueDate", DATE),
        FieldSpec("ghiChu", "description"),
        FieldSpec("hoatDong", "active", FLAG),
        FieldSpec("ngayTao", "ngayTao", DATE),
    ),
)

FEE_STATISTICS = EntityMapping(
    "fee_statistics",
    (
        FieldSpec("tenKhoanThu", "name"),
        FieldSpec("soTien", "amount", NUMBER),
        FieldSpec("totalPayments", "totalPayments", INTEGER),
        FieldSpec("totalCollected", "totalCollected", NUMBER),
    ),
)

PAYMENT = EntityMapping(
    "payment",
    (
        _ID,
        FieldSpec("hoKhau.id", "householdId", REFERENCE, aliases=("hoKhau", "hoKhauId", "ho_khau_id")),
        FieldSpec("khoanThu.id", "feeId", REFERENCE, aliases=("khoanThu", "khoanThuId", "khoan_thu_id")),
        FieldSpec("ngayNop", "paymentDate", DATE),
        FieldSpec("tongTien", "amount", NUMBER),
        FieldSpec("soTien", "amountPaid", NUMBER),
        FieldSpec("daXacNhan", "verified", FLAG),
        FieldSpec("ghiChu", "notes"),
        FieldSpec("nguoiNop", "payerName"),
    ),
)

VEHICLE = EntityMapping(
    "vehicle",
    (
        _ID,
        FieldSpec("bienSoXe", "licensePlate"),
        FieldSpec("loaiXe", "vehicleType"),
        FieldSpec("hangXe", "brand"),
        FieldSpec("mauXe", "model"),
        FieldSpec("namSanXuat", "year", INTEGER),
        FieldSpec("mauSac", "color"),
        FieldSpec("hoKhauId", "householdId", REFERENCE, aliases=("hoKhau",)),
        FieldSpec("ghiChu", "notes"),
        FieldSpec("soHoKhau", "householdNumber"),
    ),
)

UTILITY_BILL = EntityMapping(
    "utility_bill",
    (
        _ID,
        FieldSpec("loaiDichVu", "serviceType"),
        FieldSpec("thang", "month", INTEGER),
        FieldSpec("nam", "year", INTEGER),
        FieldSpec("soTien", "amount", NUMBER, aliases=("tongTien",), mirrors=("tongTien",)),
        FieldSpec("donViTinh", "unit"),
        FieldSpec("chiSoMoi", "newReading", NUMBER),
        FieldSpec("chiSoCu", "oldReading", NUMBER),
        FieldSpec("donGia", "unitPrice", NUMBER),
        FieldSpec("phiCoDinh", "fixedFee", NUMBER),
        FieldSpec("hoKhauId", "householdId", REFERENCE, aliases=("hoKhau",)),
        FieldSpec("trangThai", "status"),
        FieldSpec("ghiChu", "notes"),
    ),
)

# Record shape the /temporary-residence endpoints accept and return.
TEMPORARY_RESIDENCE = EntityMapping(
    "temporary_residence",
    (
        _ID,
        FieldSpec("trangThai", "status"),
        FieldSpec("diaChiTamTruTamVang", "address"),
        FieldSpec("thoiGian", "date", DATE),
        FieldSpec("noiDungDeNghi", "requestContent"),
        FieldSpec("nhanKhau.id", "personId", REFERENCE, aliases=("nhanKhauId", "nhanKhau")),
        FieldSpec("hoTen", "personName", aliases=("nhanKhau.hoTen",)),
    ),
)

# Older document-style shape still produced by some clients; read only to
# migrate into TEMPORARY_RESIDENCE.
TEMPORARY_RESIDENCE_DOCUMENT = EntityMapping(
    "temporary_residence_document",
    (
        _ID,
        FieldSpec("maGiay", "documentNumber"),
        FieldSpec("loaiGiay", "documentType"),
        FieldSpec("tuNgay", "startDate", DATE),
        FieldSpec("denNgay", "endDate", DATE),
        FieldSpec("lyDo", "reason"),
        FieldSpec("nhanKhauId", "personId", REFERENCE, aliases=("nhanKhau",)),
    ),
)

HOUSEHOLD_MEMBER = EntityMapping(
    "household_member",
    (
        FieldSpec("nhanKhauId", "personId", REFERENCE),
        FieldSpec("quanHeVoiChuHo", "relationshipWithOwner"),
        FieldSpec("ghiChu", "notes"),
    ),
)

HOUSEHOLD_HISTORY = EntityMapping(
    "household_history",
    (
        _ID,
        FieldSpec("hoKhauId", "householdId", REFERENCE, aliases=("hoKhau",)),
        FieldSpec("soHoKhau", "householdNumber"),
        FieldSpec("nhanKhauId", "personId", REFERENCE, aliases=("nhanKhau",)),
        FieldSpec("hoTen", "personName"),
        FieldSpec("loaiThayDoi", "changeType"),
        FieldSpec("ngayThayDoi", "changedAt", DATE),
        FieldSpec("ghiChu", "notes"),
        FieldSpec("nguoiThayDoi", "changedBy"),
    ),
)

UTILITY_PAYMENT = EntityMapping(
    "utility_payment",
    (
        _ID,
        FieldSpec("hoKhauId", "householdId", REFERENCE, aliases=("hoKhau",)),
        FieldSpec("utilityServiceId", "utilityBillId", REFERENCE),
        FieldSpec("thang", "month", INTEGER),
        FieldSpec("nam", "year", INTEGER),
        FieldSpec("phiGuiXe", "parkingFee", NUMBER),
        FieldSpec("phiDichVu", "utilityFee", NUMBER),
        FieldSpec("soTienThanhToan", "totalAmount", NUMBER, aliases=("tongTien",)),
        FieldSpec("ngayThanhToan", "paymentDate", DATE),
        FieldSpec("phuongThucThanhToan", "paymentMethod"),
        FieldSpec("trangThai", "status"),
        FieldSpec("ghiChu", "notes"),
        FieldSpec("maGiaoDich", "transactionCode"),
        FieldSpec("soHoKhau", "householdNumber"),
        FieldSpec("chuHo", "ownerName"),
    ),
)

USER = EntityMapping(
    "user",
    (
        _ID,
        FieldSpec("username", "username"),
        FieldSpec("email", "email"),
        FieldSpec("hoTen", "fullName", aliases=("fullName",)),
        FieldSpec("role", "role"),
        FieldSpec("enabled", "enabled", FLAG),
    ),
)

ALL_ENTITIES = (
    HOUSEHOLD,
    PERSON,
    FEE,
    PAYMENT,
    VEHICLE,
    UTILITY_BILL,
    TEMPORARY_RESIDENCE,
    TEMPORARY_RESIDENCE_DOCUMENT,
    HOUSEHOLD_MEMBER,
    HOUSEHOLD_HISTORY,
    UTILITY_PAYMENT,
    USER,
)
